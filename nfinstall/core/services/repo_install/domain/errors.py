"""
L1 Domain — Installer error taxonomy.

Fatal conditions raise a subclass of ``InstallerError``; the CLI turns
any of them into exit code 1.  Per-package verification and post-exec
failures are *not* errors: they are logged and recorded in the report.
"""

from __future__ import annotations

from collections.abc import Sequence


class InstallerError(Exception):
    """Base class for every fatal installer condition."""

    exit_code = 1


class MissingToolError(InstallerError):
    """No candidate for a required capability is available."""

    def __init__(
        self,
        capability: str,
        candidates: Sequence[str],
        remedy: str = "",
    ) -> None:
        self.capability = capability
        self.candidates = tuple(candidates)
        self.remedy = remedy
        tried = ", ".join(f"'{c}'" for c in self.candidates)
        message = f"No {capability} found. Tried {tried}."
        if remedy:
            message = f"{message} {remedy}"
        super().__init__(message)


class UnsupportedDistributionError(InstallerError):
    """Host is neither Debian nor Red Hat family."""


class RepoWriteError(InstallerError):
    """Repository definition or credentials could not be persisted."""


class KeyImportError(InstallerError):
    """Signing key could not be fetched or dearmored."""


class MetadataRefreshError(InstallerError):
    """Package manager metadata refresh failed after the repo was written."""


class InstallFailureError(InstallerError):
    """Package manager install command exited non-zero."""
