"""
L4 Execution — Debian family (apt) repository and packages.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from nfinstall.core.models.install import InstallRequest, PackageCheck, RepoAction
from nfinstall.core.models.settings import RepositorySettings
from nfinstall.core.services.repo_install.data.constants import (
    AUTH_DIR_MODE,
    AUTH_FILE_MODE,
    GNUPG_TOOLS,
    HTTP_CLIENTS,
    HTTP_FETCH_ARGS,
    KEYRING_READ_BITS,
)
from nfinstall.core.services.repo_install.detection.apt_version import (
    get_apt_version,
    use_deb822,
)
from nfinstall.core.services.repo_install.domain.capability import resolve_first_available
from nfinstall.core.services.repo_install.domain.errors import (
    InstallFailureError,
    KeyImportError,
    MetadataRefreshError,
    RepoWriteError,
)
from nfinstall.core.services.repo_install.domain.render import (
    deb_key_url,
    render_apt_auth,
    render_deb822,
    render_deb_legacy,
)
from nfinstall.core.services.repo_install.execution.repo_file import (
    remove_files,
    write_private_file,
)
from nfinstall.core.services.repo_install.execution.subprocess_runner import _run_subprocess

logger = logging.getLogger(__name__)


def import_signing_key(url: str, keyring: Path, gnupg: str, http_client: str) -> None:
    """Fetch an armored key and dearmor it into ``keyring``.

    The key is always refreshed, even when the keyring exists.

    Raises:
        KeyImportError: Download, dearmor or chmod failed.
    """
    fetched = _run_subprocess(HTTP_FETCH_ARGS[http_client] + [url], text=False)
    if not fetched["ok"] or not fetched["stdout"]:
        raise KeyImportError(
            f"Failed to download signing key from {url} with {http_client}: "
            f"{fetched.get('stderr') or fetched.get('error') or 'empty response'}"
        )

    try:
        keyring.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise KeyImportError(f"Cannot create {keyring.parent}: {e}") from e

    dearmored = _run_subprocess(
        [gnupg, "--batch", "--yes", "--dearmor", "--output", str(keyring)],
        text=False,
        input_data=fetched["stdout"],
    )
    if not dearmored["ok"]:
        raise KeyImportError(
            f"{gnupg} could not dearmor the signing key: "
            f"{dearmored.get('stderr') or dearmored['error']}"
        )

    try:
        os.chmod(keyring, os.stat(keyring).st_mode | KEYRING_READ_BITS)
    except OSError as e:
        raise KeyImportError(f"Cannot make {keyring} readable: {e}") from e
    logger.info("Imported signing key into %s", keyring)


def configure_debian_repo(
    request: InstallRequest,
    settings: RepositorySettings,
) -> tuple[Path, RepoAction]:
    """Import the key, write the sources file, refresh apt.

    Returns:
        The sources file written and ``"created"`` (the file is always
        rewritten from scratch).

    Raises:
        MissingToolError: No GnuPG or no HTTP client.
        KeyImportError: The signing key could not be installed.
        RepoWriteError: A file could not be written or removed.
        MetadataRefreshError: ``apt-get update`` failed.
    """
    gnupg = resolve_first_available(
        GNUPG_TOOLS, "GnuPG CLI", remedy="Try installing 'gnupg'.",
    )
    http_client = resolve_first_available(
        HTTP_CLIENTS, "http client", remedy="Try installing 'curl' or 'wget'.",
    )

    import_signing_key(
        deb_key_url(settings, request.deb_repo),
        settings.keyring_path,
        gnupg,
        http_client,
    )

    version = get_apt_version()
    modern = use_deb822(version)
    logger.info(
        "apt version %s → %s format", version or "unknown",
        "DEB822" if modern else "legacy",
    )

    remove_files(settings.apt_list_file, settings.apt_sources_file)
    if modern:
        target = settings.apt_sources_file
        content = render_deb822(settings, request.deb_repo, request.channel)
    else:
        target = settings.apt_list_file
        content = render_deb_legacy(settings, request.deb_repo, request.channel)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise RepoWriteError(f"Cannot write {target}: {e}") from e
    logger.info("Wrote %s", target)

    if request.channel.private and request.credentials is not None:
        write_private_file(
            settings.apt_auth_file,
            render_apt_auth(
                settings.auth_host,
                request.credentials.username,
                request.credentials.password.get_secret_value(),
            ),
            file_mode=AUTH_FILE_MODE,
            dir_mode=AUTH_DIR_MODE,
        )

    result = _run_subprocess(["apt-get", "update"], capture=False)
    if not result["ok"]:
        raise MetadataRefreshError(
            f"apt-get update failed ({result['error']}); "
            f"repository file {target} was written"
        )
    return target, "created"


def apt_install_args(request: InstallRequest) -> list[str]:
    """``apt-get install`` argv; one pinned version allows downgrades for all."""
    args = ["apt-get", "install", "--yes"]
    if request.pins_versions:
        args.append("--allow-downgrades")
    return args + list(request.packages)


def install_debian_packages(request: InstallRequest) -> list[PackageCheck]:
    """Install all packages in one call, then report installed versions.

    Raises:
        InstallFailureError: The install command failed.
    """
    result = _run_subprocess(apt_install_args(request), capture=False)
    if not result["ok"]:
        raise InstallFailureError(
            f"apt-get install failed ({result['error']}): {' '.join(request.packages)}"
        )

    checks: list[PackageCheck] = []
    for spec in request.packages:
        name = spec.split("=", 1)[0]
        query = _run_subprocess(["dpkg-query", "-W", "-f=${Version}", name])
        version = query["stdout"].strip() if query["ok"] else ""
        if not version:
            logger.warning("Package %s is not installed: %s", name, query.get("error", "no version"))
            checks.append(PackageCheck(package=name, ok=False, detail="not installed"))
            continue

        show = _run_subprocess(["apt-cache", "show", f"{name}={version}"])
        if show["ok"]:
            checks.append(PackageCheck(package=name, ok=True, version=version))
        else:
            logger.warning("Package %s %s not found in apt cache", name, version)
            checks.append(PackageCheck(
                package=name, ok=False, version=version, detail="not found in apt cache",
            ))
    return checks
