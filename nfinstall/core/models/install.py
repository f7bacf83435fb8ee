"""
Install request models — the immutable run configuration.

An ``InstallRequest`` is built once from the command line before any
side effect happens, then passed explicitly to every component.
Nothing mutates it during a run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr

Visibility = Literal["public", "private"]
Track = Literal["stable", "test"]
DistroFamily = Literal["redhat", "debian", "unsupported"]
RepoAction = Literal["created", "updated", "unchanged"]


class Channel(BaseModel):
    """Which repository namespace to configure."""

    model_config = ConfigDict(frozen=True)

    visibility: Visibility = "public"
    track: Track = "stable"

    @property
    def private(self) -> bool:
        return self.visibility == "private"


class Credentials(BaseModel):
    """Username/password pair for a private channel."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: SecretStr


class InstallRequest(BaseModel):
    """Everything a run needs, resolved up front.

    ``rpm_repo`` and ``deb_repo`` are the opaque repository identifiers
    for the selected channel (already resolved from env overrides or
    templates).  ``packages`` keeps the order given on the command line.
    """

    model_config = ConfigDict(frozen=True)

    channel: Channel = Field(default_factory=Channel)
    rpm_repo: str
    deb_repo: str
    credentials: Credentials | None = None
    packages: tuple[str, ...] = ()
    post_exec: Path | None = None

    @property
    def pins_versions(self) -> bool:
        """Whether any package specifier pins a version with ``=``."""
        return any("=" in pkg for pkg in self.packages)


class PackageCheck(BaseModel):
    """Post-install verification result for one package."""

    package: str
    ok: bool
    version: str | None = None
    detail: str = ""


class InstallReport(BaseModel):
    """Outcome of a run, for display by the CLI."""

    family: DistroFamily
    repo_file: Path
    repo_action: RepoAction
    packages: list[PackageCheck] = Field(default_factory=list)
    post_exec_ok: bool | None = None

    @property
    def installed(self) -> bool:
        return bool(self.packages)
