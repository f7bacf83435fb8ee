"""
L1 Domain — First-available capability resolution.

The installer repeatedly needs "the first of these tools that exists":
checksum algorithm, package manager, GnuPG, HTTP client.  One helper
handles all of them.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Sequence

from nfinstall.core.services.repo_install.domain.errors import MissingToolError

logger = logging.getLogger(__name__)


def _on_path(name: str) -> bool:
    return shutil.which(name) is not None


def resolve_first_available(
    candidates: Sequence[str],
    capability: str,
    *,
    remedy: str = "",
    is_available: Callable[[str], bool] | None = None,
) -> str:
    """Return the first candidate for which ``is_available`` is true.

    Args:
        candidates: Names in order of preference.
        capability: Human name of what is being looked for, used in
            the error message (e.g. ``"GnuPG CLI"``).
        remedy: Hint appended to the error message.
        is_available: Probe; defaults to "executable is on PATH".

    Raises:
        MissingToolError: Listing every candidate tried.
    """
    probe = is_available or _on_path
    for name in candidates:
        if probe(name):
            logger.debug("Resolved %s → %s", capability, name)
            return name
    raise MissingToolError(capability, candidates, remedy)
