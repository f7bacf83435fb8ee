"""
L4 Execution — Red Hat family (dnf/yum) repository and packages.
"""

from __future__ import annotations

import logging
import shutil

from nfinstall.core.models.install import Credentials, InstallRequest, PackageCheck, RepoAction
from nfinstall.core.models.settings import RepositorySettings
from nfinstall.core.services.repo_install.data.constants import (
    CONFIG_MANAGER_ARGS,
    PACKAGE_MANAGERS_RPM,
)
from nfinstall.core.services.repo_install.domain.capability import resolve_first_available
from nfinstall.core.services.repo_install.domain.errors import (
    InstallFailureError,
    MetadataRefreshError,
    RepoWriteError,
)
from nfinstall.core.services.repo_install.domain.render import render_rpm_repo
from nfinstall.core.services.repo_install.execution.repo_file import write_if_changed
from nfinstall.core.services.repo_install.execution.subprocess_runner import _run_subprocess

logger = logging.getLogger(__name__)


def resolve_rpm_package_manager() -> str:
    return resolve_first_available(PACKAGE_MANAGERS_RPM, "package manager")


def config_manager_flavor(packager: str) -> str:
    """Key into ``CONFIG_MANAGER_ARGS`` for this host's package manager.

    dnf5 hosts ship a ``dnf5`` binary next to the ``dnf`` name.
    """
    if packager == "dnf" and shutil.which("dnf5") is not None:
        return "dnf5"
    return packager


def _apply_credentials(
    packager: str,
    credentials: Credentials,
    settings: RepositorySettings,
) -> None:
    """Store username and password as repo options, one call each."""
    flavor = config_manager_flavor(packager)
    base, option_fmt = CONFIG_MANAGER_ARGS[flavor]
    password = credentials.password.get_secret_value()
    options = (
        ("username", credentials.username),
        ("password", password),
    )
    for key, value in options:
        option = option_fmt.format(option=f"{settings.rpm_repo_id}.{key}={value}")
        cmd = base + [option]
        result = _run_subprocess(cmd, redact=(password,))
        if not result["ok"]:
            raise RepoWriteError(
                f"Failed to store repository {key} with {' '.join(base)}: "
                f"{result.get('stderr') or result['error']}"
            )
    logger.info("Stored credentials for repository %s (%s)", settings.rpm_repo_id, flavor)


def configure_redhat_repo(
    request: InstallRequest,
    settings: RepositorySettings,
) -> RepoAction:
    """Write the ``.repo`` file, store credentials, refresh metadata.

    Returns:
        What happened to the repo file.

    Raises:
        MissingToolError: Neither dnf nor yum is installed.
        RepoWriteError: The file or the credentials could not be saved.
        MetadataRefreshError: ``makecache`` failed.
    """
    packager = resolve_rpm_package_manager()

    content = render_rpm_repo(settings, request.rpm_repo, request.channel)
    action = write_if_changed(settings.rpm_repo_file, content)

    if request.channel.private and request.credentials is not None:
        _apply_credentials(packager, request.credentials, settings)

    result = _run_subprocess([packager, "makecache"], capture=False)
    if not result["ok"]:
        raise MetadataRefreshError(
            f"{packager} makecache failed ({result['error']}); "
            f"repository file {settings.rpm_repo_file} was {action}"
        )
    return action


def install_redhat_packages(request: InstallRequest) -> list[PackageCheck]:
    """Install all packages in one call, then check each one.

    Raises:
        InstallFailureError: The install command failed.
    """
    packager = resolve_rpm_package_manager()
    packages = list(request.packages)

    result = _run_subprocess(
        [packager, "install", "--assumeyes"] + packages,
        capture=False,
    )
    if not result["ok"]:
        raise InstallFailureError(
            f"{packager} install failed ({result['error']}): {' '.join(packages)}"
        )

    checks: list[PackageCheck] = []
    for pkg in packages:
        info = _run_subprocess([packager, "info", pkg])
        if info["ok"]:
            checks.append(PackageCheck(
                package=pkg, ok=True, version=_parse_info_version(info["stdout"]),
            ))
        else:
            logger.warning("Could not verify package %s: %s", pkg, info["error"])
            checks.append(PackageCheck(package=pkg, ok=False, detail=info["error"]))
    return checks


def _parse_info_version(output: str) -> str | None:
    """Pull ``Version`` (and ``Release``) out of ``dnf info`` output."""
    version = release = None
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key == "Version" and version is None:
            version = value.strip()
        elif key == "Release" and release is None:
            release = value.strip()
    if version and release:
        return f"{version}-{release}"
    return version
