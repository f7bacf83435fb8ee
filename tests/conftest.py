"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

import pytest

from nfinstall.core.models.settings import RepositorySettings
from nfinstall.core.services.repo_install.execution import debian, redhat
from nfinstall.core.services.repo_install.orchestration import orchestrator

FAKE_ARMORED_KEY = b"-----BEGIN PGP PUBLIC KEY BLOCK-----\nfake\n-----END PGP PUBLIC KEY BLOCK-----\n"


class FakeRunner:
    """Records commands instead of running them.

    Responses are matched by argv prefix, most recently registered
    first.  Unmatched commands succeed with empty output (or a fake
    armored key for binary calls).  ``gpg --dearmor --output PATH``
    creates PATH so that later chmod calls have something to act on.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []
        self._responses: list[tuple[tuple[str, ...], dict[str, Any]]] = []
        self.key = FAKE_ARMORED_KEY

    def respond(self, *prefix: str, ok: bool = True, **result: Any) -> None:
        if ok:
            payload = {"ok": True, "stdout": "", "returncode": 0}
        else:
            payload = {
                "ok": False,
                "error": "Command failed (exit 1)",
                "stdout": "",
                "stderr": "",
                "returncode": 1,
            }
        payload.update(result)
        self._responses.insert(0, (prefix, payload))

    def __call__(self, cmd: list[str], **kwargs: Any) -> dict[str, Any]:
        cmd = list(cmd)
        self.calls.append(cmd)
        self.kwargs.append(kwargs)

        result: dict[str, Any] | None = None
        for prefix, payload in self._responses:
            if tuple(cmd[: len(prefix)]) == prefix:
                result = dict(payload)
                break
        if result is None:
            stdout: str | bytes = FAKE_ARMORED_KEY if kwargs.get("text") is False else ""
            result = {"ok": True, "stdout": stdout, "returncode": 0}

        if result["ok"] and "--dearmor" in cmd:
            out = Path(cmd[cmd.index("--output") + 1])
            out.write_bytes(b"dearmored-keyring")
            out.chmod(0o600)
        return result

    def called(self, *prefix: str) -> list[list[str]]:
        """All recorded commands starting with ``prefix``."""
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of channel and logging setup."""
    for var in (
        "NFPAX_RPM",
        "NFPAX_DEB",
        "NFINSTALL_CONFIG",
        "NFINSTALL_LOG_LEVEL",
        "NFINSTALL_LOG_FILE",
        "NFINSTALL_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def host_root(tmp_path: Path) -> Path:
    """Empty fake filesystem root for distribution markers."""
    root = tmp_path / "host"
    (root / "etc").mkdir(parents=True)
    return root


@pytest.fixture
def settings(tmp_path: Path, host_root: Path) -> RepositorySettings:
    """Settings with every host path redirected into tmp_path."""
    return RepositorySettings(
        rpm_repo_file=tmp_path / "etc/yum.repos.d/netfoundry-release.repo",
        apt_sources_dir=tmp_path / "etc/apt/sources.list.d",
        keyring_path=tmp_path / "usr/share/keyrings/netfoundry.gpg",
        apt_auth_file=tmp_path / "etc/apt/auth.conf.d/netfoundry.conf",
        host_root=host_root,
    )


@pytest.fixture
def fake_runner(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    """Replace the subprocess runner everywhere it is used."""
    runner = FakeRunner()
    for module in (redhat, debian, orchestrator):
        monkeypatch.setattr(module, "_run_subprocess", runner)
    return runner


@pytest.fixture
def tools(monkeypatch: pytest.MonkeyPatch):
    """Declare which executables exist on PATH: ``tools("dnf", "gpg")``."""

    def _set(*names: str) -> None:
        present = set(names)
        monkeypatch.setattr(
            shutil, "which",
            lambda name, *a, **kw: f"/usr/bin/{name}" if name in present else None,
        )

    _set()
    return _set
