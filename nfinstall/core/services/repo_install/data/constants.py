"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Candidate tools, in order of preference.
PACKAGE_MANAGERS_RPM: tuple[str, ...] = ("dnf", "yum")
GNUPG_TOOLS: tuple[str, ...] = ("gpg", "gpg2")
HTTP_CLIENTS: tuple[str, ...] = ("wget", "curl")
DIGEST_ALGORITHMS: tuple[str, ...] = ("sha256", "md5")

# How each HTTP client writes a URL's body to stdout.
HTTP_FETCH_ARGS: dict[str, list[str]] = {
    "wget": ["wget", "-qO-"],
    "curl": ["curl", "-fsSL"],
}

# Config-manager front end used to persist per-repo options, and how each
# spells one REPO.KEY=VALUE option.  dnf5 replaced "--save --setopt=" with
# a "setopt" subcommand.
CONFIG_MANAGER_ARGS: dict[str, tuple[list[str], str]] = {
    "dnf": (["dnf", "config-manager", "--save"], "--setopt={option}"),
    "dnf5": (["dnf", "config-manager", "setopt"], "{option}"),
    "yum": (["yum-config-manager", "--save"], "--setopt={option}"),
}

# Distribution marker files, relative to the host root.
REDHAT_MARKERS: tuple[str, ...] = ("etc/redhat-release", "etc/amazon-linux-release")
DEBIAN_MARKERS: tuple[str, ...] = ("etc/debian_version",)

# Binaries that betray a family when no marker file exists.
REDHAT_BINARIES: tuple[str, ...] = ("dnf", "yum")
DEBIAN_BINARIES: tuple[str, ...] = ("apt-get",)

# Debian suites per channel visibility.
DEB_SUITES: dict[str, str] = {
    "public": "debian",
    "private": "debian stable",
}
DEB_COMPONENT = "main"

# File modes.
KEYRING_READ_BITS = 0o444
AUTH_FILE_MODE = 0o600
AUTH_DIR_MODE = 0o700
