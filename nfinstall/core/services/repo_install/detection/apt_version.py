"""
L3 Detection — APT version and sources-file format.

apt 1.8+ reads DEB822 ``.sources`` files; older releases only
understand one-line ``.list`` entries.  Anything we cannot parse is
treated as old.
"""

from __future__ import annotations

import logging
import re
import subprocess

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)")


def get_apt_version() -> str | None:
    """Second token of the first line of ``apt --version``, or None."""
    try:
        r = subprocess.run(
            ["apt", "--version"],
            capture_output=True, text=True, timeout=10,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as exc:
        logger.debug("apt --version failed: %s", exc)
        return None

    lines = (r.stdout or "").strip().splitlines()
    if r.returncode != 0 or not lines:
        return None
    parts = lines[0].split()
    return parts[1] if len(parts) > 1 else None


def use_deb822(version: str | None) -> bool:
    """Whether this apt version should get a DEB822 ``.sources`` file.

    ``"2.4.5"`` → True, ``"1.8.2"`` → True, ``"1.6.12"`` → False,
    ``None`` or garbage → False.
    """
    if not version:
        return False
    m = _VERSION_RE.match(version.strip())
    if not m:
        return False
    major, minor = int(m.group(1)), int(m.group(2))
    if major >= 2:
        return True
    return major == 1 and minor in (8, 9)
