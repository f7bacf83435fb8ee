"""
L4 Execution — Timestamped backup of a file about to be replaced.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def backup_path(path: Path, now: datetime | None = None) -> Path:
    """``PATH.<ISO-8601 timestamp>``, seconds precision, local offset.

    If that name is taken (two updates within one second), ``.1``,
    ``.2``, ... is appended until a free name is found.
    """
    stamp = (now or datetime.now().astimezone()).isoformat(timespec="seconds")
    dest = path.with_name(f"{path.name}.{stamp}")
    n = 0
    while dest.exists():
        n += 1
        dest = path.with_name(f"{path.name}.{stamp}.{n}")
    return dest


def backup_file(path: Path, now: datetime | None = None) -> Path:
    """Rename ``path`` aside and return where it went.

    Raises:
        OSError: If the rename fails.
    """
    dest = backup_path(path, now)
    path.rename(dest)
    logger.info("Backed up %s → %s", path, dest)
    return dest
