"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for state-changing
operations.  Command failures come back as a result dict; this function
never raises for a non-zero exit.
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)


def _run_subprocess(
    cmd: list[str],
    *,
    capture: bool = True,
    text: bool = True,
    input_data: str | bytes | None = None,
    redact: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Run a command to completion and report the outcome.

    No timeout is applied.

    Args:
        cmd: Command list for ``subprocess.run()``.
        capture: Capture stdout/stderr.  When False the command writes
            straight to the terminal so the operator sees progress.
        text: Decode output as text.  Pass False for binary payloads
            such as signing keys.
        input_data: Data piped to stdin.
        redact: Substrings replaced with ``***`` in log messages.

    Returns:
        ``{"ok": True, "stdout": ..., "returncode": 0, "elapsed_ms": N}``
        on success, ``{"ok": False, "error": "...", ...}`` on failure.
    """
    shown = " ".join(cmd)
    for secret in redact:
        if secret:
            shown = shown.replace(secret, "***")
    logger.debug("Executing: %s", shown)

    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture,
            text=text,
            input=input_data,
        )
    except FileNotFoundError:
        return {"ok": False, "error": f"Command not found: {cmd[0]}", "returncode": None}
    except OSError as e:
        logger.warning("Cannot execute %s: %s", shown, e)
        return {"ok": False, "error": str(e), "returncode": None}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout if result.stdout is not None else ("" if text else b"")
    stderr = result.stderr if result.stderr is not None else ("" if text else b"")

    if result.returncode == 0:
        return {
            "ok": True,
            "stdout": stdout,
            "returncode": 0,
            "elapsed_ms": elapsed_ms,
        }

    if isinstance(stderr, bytes):
        stderr = stderr.decode(errors="replace")
    logger.debug("Command failed (exit %d): %s", result.returncode, shown)
    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "stderr": stderr[-2000:],
        "stdout": stdout,
        "returncode": result.returncode,
        "elapsed_ms": elapsed_ms,
    }
