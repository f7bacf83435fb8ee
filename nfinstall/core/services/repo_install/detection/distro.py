"""
L3 Detection — Distribution family.

Read-only probe.  Evaluates an ordered table of (predicate, family)
pairs; the first predicate that holds wins.  Marker files come first
because they are authoritative; package-manager binaries are only a
fallback for hosts without them.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from nfinstall.core.models.install import DistroFamily
from nfinstall.core.services.repo_install.data.constants import (
    DEBIAN_BINARIES,
    DEBIAN_MARKERS,
    REDHAT_BINARIES,
    REDHAT_MARKERS,
)

logger = logging.getLogger(__name__)

Probe = Callable[[Path], bool]


def _marker(relpath: str) -> Probe:
    def probe(root: Path) -> bool:
        return (root / relpath).is_file()

    probe.__name__ = f"marker:{relpath}"
    return probe


def _binary(name: str) -> Probe:
    def probe(root: Path) -> bool:
        return shutil.which(name) is not None

    probe.__name__ = f"binary:{name}"
    return probe


DETECTION_TABLE: tuple[tuple[Probe, DistroFamily], ...] = (
    *((_marker(m), "redhat") for m in REDHAT_MARKERS),
    *((_marker(m), "debian") for m in DEBIAN_MARKERS),
    *((_binary(b), "redhat") for b in REDHAT_BINARIES),
    *((_binary(b), "debian") for b in DEBIAN_BINARIES),
)


def detect_distribution(
    root: Path = Path("/"),
    table: tuple[tuple[Probe, DistroFamily], ...] = DETECTION_TABLE,
) -> DistroFamily:
    """Return ``"redhat"``, ``"debian"`` or ``"unsupported"``.

    Args:
        root: Filesystem root under which marker files are looked up.
        table: Ordered (predicate, family) pairs.
    """
    for probe, family in table:
        if probe(root):
            logger.info("Detected %s family (%s)", family, probe.__name__)
            return family
    logger.info("No distribution marker or known package manager found")
    return "unsupported"
