"""
L4 Execution — Idempotent repository file writes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from nfinstall.core.models.install import RepoAction
from nfinstall.core.services.repo_install.domain.checksum import contents_match
from nfinstall.core.services.repo_install.domain.errors import RepoWriteError
from nfinstall.core.services.repo_install.execution.backup import backup_file

logger = logging.getLogger(__name__)


def write_if_changed(path: Path, content: str) -> RepoAction:
    """Write ``content`` to ``path`` only if it differs from what is there.

    - absent or empty file → write, ``"created"``
    - same digest → leave alone, ``"unchanged"``
    - different digest → rename the old file aside with a timestamp
      suffix, write the new one, ``"updated"``

    Raises:
        RepoWriteError: On any filesystem error.
    """
    new = content.encode("utf-8")
    try:
        if path.is_file() and path.stat().st_size > 0:
            if contents_match(path.read_bytes(), new):
                logger.info("%s is up to date", path)
                return "unchanged"
            backup_file(path)
            path.write_bytes(new)
            logger.info("Updated %s", path)
            return "updated"

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(new)
        logger.info("Created %s", path)
        return "created"
    except OSError as e:
        raise RepoWriteError(f"Cannot write {path}: {e}") from e


def write_private_file(path: Path, content: str, *, file_mode: int, dir_mode: int) -> None:
    """Write a secret-bearing file with owner-only permissions.

    The file is created with ``file_mode`` from the start so its
    content is never readable by others, and its directory is locked
    to ``dir_mode``.

    Raises:
        RepoWriteError: On any filesystem error.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        os.chmod(path.parent, dir_mode)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, file_mode)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(path, file_mode)
    except OSError as e:
        raise RepoWriteError(f"Cannot write {path}: {e}") from e
    logger.info("Wrote credentials to %s", path)


def remove_files(*paths: Path) -> None:
    """Delete each path that exists.

    Raises:
        RepoWriteError: If an existing file cannot be removed.
    """
    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise RepoWriteError(f"Cannot remove {path}: {e}") from e
