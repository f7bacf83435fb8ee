"""
Repo Install — read-only host probes: distribution family, apt version.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from nfinstall.core.services.repo_install.detection import apt_version
from nfinstall.core.services.repo_install.detection.apt_version import (
    get_apt_version,
    use_deb822,
)
from nfinstall.core.services.repo_install.detection.distro import detect_distribution


def _touch(root: Path, relpath: str) -> None:
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("x\n")


# ── Distribution family ──────────────────────────────────────────────


class TestDetectDistribution:
    def test_redhat_marker(self, host_root, tools):
        _touch(host_root, "etc/redhat-release")
        assert detect_distribution(host_root) == "redhat"

    def test_amazon_linux_marker(self, host_root, tools):
        _touch(host_root, "etc/amazon-linux-release")
        assert detect_distribution(host_root) == "redhat"

    def test_debian_marker(self, host_root, tools):
        _touch(host_root, "etc/debian_version")
        assert detect_distribution(host_root) == "debian"

    def test_redhat_marker_beats_debian_marker(self, host_root, tools):
        _touch(host_root, "etc/redhat-release")
        _touch(host_root, "etc/debian_version")
        assert detect_distribution(host_root) == "redhat"

    def test_marker_beats_binary(self, host_root, tools):
        tools("dnf", "yum")
        _touch(host_root, "etc/debian_version")
        assert detect_distribution(host_root) == "debian"

    @pytest.mark.parametrize(
        ("binaries", "expected"),
        [
            (("dnf",), "redhat"),
            (("yum",), "redhat"),
            (("apt-get",), "debian"),
            (("apt-get", "yum"), "redhat"),
        ],
    )
    def test_binary_fallback(self, host_root, tools, binaries, expected):
        tools(*binaries)
        assert detect_distribution(host_root) == expected

    def test_nothing_found(self, host_root, tools):
        assert detect_distribution(host_root) == "unsupported"

    def test_custom_table_order(self, host_root):
        table = (
            (lambda root: False, "redhat"),
            (lambda root: True, "debian"),
            (lambda root: True, "redhat"),
        )
        assert detect_distribution(host_root, table) == "debian"


# ── APT version / format selection ───────────────────────────────────


class TestUseDeb822:
    @pytest.mark.parametrize("version", ["2.4.5", "2.0", "1.8.2", "1.9.10", "3.0.3"])
    def test_modern(self, version):
        assert use_deb822(version)

    @pytest.mark.parametrize("version", ["1.6.12", "1.7.0", "1.4", "0.9.7", "1.10.1"])
    def test_legacy(self, version):
        assert not use_deb822(version)

    @pytest.mark.parametrize("version", [None, "", "unknown", "v2", "apt"])
    def test_unparseable_defaults_to_legacy(self, version):
        assert not use_deb822(version)


class TestGetAptVersion:
    def test_parses_second_token(self, monkeypatch):
        monkeypatch.setattr(
            apt_version.subprocess, "run",
            MagicMock(return_value=MagicMock(returncode=0, stdout="apt 2.4.5 (amd64)\n")),
        )
        assert get_apt_version() == "2.4.5"

    def test_apt_missing(self, monkeypatch):
        monkeypatch.setattr(
            apt_version.subprocess, "run", MagicMock(side_effect=FileNotFoundError),
        )
        assert get_apt_version() is None

    def test_timeout(self, monkeypatch):
        monkeypatch.setattr(
            apt_version.subprocess, "run",
            MagicMock(side_effect=subprocess.TimeoutExpired(["apt"], 10)),
        )
        assert get_apt_version() is None

    def test_nonzero_exit(self, monkeypatch):
        monkeypatch.setattr(
            apt_version.subprocess, "run",
            MagicMock(return_value=MagicMock(returncode=1, stdout="")),
        )
        assert get_apt_version() is None

    def test_single_token_output(self, monkeypatch):
        monkeypatch.setattr(
            apt_version.subprocess, "run",
            MagicMock(return_value=MagicMock(returncode=0, stdout="apt\n")),
        )
        assert get_apt_version() is None
