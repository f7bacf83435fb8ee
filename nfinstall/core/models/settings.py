"""
Repository settings — vendor endpoints and host paths.

Defaults describe the production NetFoundry repositories.  Every field
can be overridden from the optional YAML config file; tests use the
path fields to redirect writes into a temporary directory.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class RepositorySettings(BaseModel):
    """Where the repository lives and where its config goes on the host."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # ── Vendor endpoints ──
    base_url: str = "https://netfoundry.jfrog.io/artifactory"
    auth_host: str = "netfoundry.jfrog.io"
    public_repo_template: str = "nfpax-netfoundry-{format}-{track}"
    private_repo_template: str = "nfpax-netfoundry-private-{format}-{track}"
    # May reference {base_url} and {deb_repo} for a per-channel key path
    deb_key_url: str = "https://get.netfoundry.io/netfoundry.asc"

    # ── RPM host paths ──
    rpm_repo_file: Path = Path("/etc/yum.repos.d/netfoundry-release.repo")
    rpm_repo_id: str = "NetFoundryRelease"
    rpm_repo_name: str = "NetFoundry Release"

    # ── Debian host paths ──
    apt_sources_dir: Path = Path("/etc/apt/sources.list.d")
    apt_repo_basename: str = "netfoundry-release"
    keyring_path: Path = Path("/usr/share/keyrings/netfoundry.gpg")
    apt_auth_file: Path = Path("/etc/apt/auth.conf.d/netfoundry.conf")

    # Root for distribution marker probes (/etc/redhat-release etc.)
    host_root: Path = Path("/")

    @property
    def apt_list_file(self) -> Path:
        return self.apt_sources_dir / f"{self.apt_repo_basename}.list"

    @property
    def apt_sources_file(self) -> Path:
        return self.apt_sources_dir / f"{self.apt_repo_basename}.sources"
