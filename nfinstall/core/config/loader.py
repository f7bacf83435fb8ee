"""
Configuration loader — settings file, channel identifiers, run request.

Reads the optional YAML settings file into ``RepositorySettings``,
resolves the repository identifiers for the selected channel, and
builds the immutable ``InstallRequest`` before anything touches the
host.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

import yaml
from pydantic import SecretStr, ValidationError

from nfinstall.core.models.install import Channel, Credentials, InstallRequest
from nfinstall.core.models.settings import RepositorySettings
from nfinstall.core.services.repo_install.domain.errors import InstallerError
from nfinstall.core.services.repo_install.domain.render import render_template

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NFINSTALL_CONFIG"
RPM_REPO_ENV_VAR = "NFPAX_RPM"
DEB_REPO_ENV_VAR = "NFPAX_DEB"


class ConfigError(InstallerError):
    """Raised when configuration or command-line input is invalid."""


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> RepositorySettings:
    """Load repository settings.

    Args:
        path: Explicit YAML file. If None, ``NFINSTALL_CONFIG`` is
            consulted; with neither, built-in defaults are returned.
        environ: Environment mapping (default: ``os.environ``).

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    env = os.environ if environ is None else environ
    if path is None and env.get(CONFIG_ENV_VAR):
        path = Path(env[CONFIG_ENV_VAR])

    if path is None:
        return RepositorySettings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "repository" key or be flat
    settings_data = data["repository"] if "repository" in data else data
    if not isinstance(settings_data, dict):
        raise ConfigError(f"Expected 'repository' to be a mapping in {path}")

    try:
        settings = RepositorySettings.model_validate(settings_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings


def resolve_repo_ids(
    settings: RepositorySettings,
    channel: Channel,
    environ: Mapping[str, str] | None = None,
) -> tuple[str, str]:
    """Return ``(rpm_repo, deb_repo)`` for a channel.

    ``NFPAX_RPM`` / ``NFPAX_DEB`` win when set; otherwise the public or
    private template is rendered with ``{format}`` and ``{track}``.
    """
    env = os.environ if environ is None else environ
    template = (
        settings.private_repo_template if channel.private
        else settings.public_repo_template
    )

    def _render(fmt: str) -> str:
        return render_template(template, {"format": fmt, "track": channel.track})

    rpm_repo = env.get(RPM_REPO_ENV_VAR) or _render("rpm")
    deb_repo = env.get(DEB_REPO_ENV_VAR) or _render("deb")
    return rpm_repo, deb_repo


def build_request(
    settings: RepositorySettings,
    *,
    private: bool = False,
    test: bool = False,
    username: str | None = None,
    password: str | None = None,
    packages: Sequence[str] = (),
    post_exec: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> InstallRequest:
    """Validate command-line input and freeze it into an ``InstallRequest``.

    Raises:
        ConfigError: Private channel without both username and password.
    """
    channel = Channel(
        visibility="private" if private else "public",
        track="test" if test else "stable",
    )

    credentials: Credentials | None = None
    if channel.private:
        missing = [
            flag for flag, value in (("--username", username), ("--password", password))
            if not value
        ]
        if missing:
            raise ConfigError(
                f"--private requires --username and --password (missing {', '.join(missing)})"
            )
        credentials = Credentials(username=username, password=SecretStr(password))
    elif username or password:
        logger.warning("Ignoring --username/--password without --private")

    rpm_repo, deb_repo = resolve_repo_ids(settings, channel, environ)
    logger.debug("Channel %s/%s → rpm=%s deb=%s", channel.visibility, channel.track, rpm_repo, deb_repo)

    return InstallRequest(
        channel=channel,
        rpm_repo=rpm_repo,
        deb_repo=deb_repo,
        credentials=credentials,
        packages=tuple(packages),
        post_exec=post_exec.absolute() if post_exec is not None else None,
    )
