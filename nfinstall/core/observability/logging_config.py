"""
Logging configuration — central setup for the installer entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  NFINSTALL_LOG_LEVEL env var  >  WARNING (default)

Optional file output via NFINSTALL_LOG_FILE / NFINSTALL_LOG_FILE_LEVEL.
The file is opened once per run in append mode.
"""

from __future__ import annotations

import logging
import sys

# Console: bare messages at WARNING so installer output stays readable;
# INFO adds time and module, DEBUG adds level and line.
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_CONSOLE_DEFAULT = ("%(message)s", None)

# The log file keeps full dates: it is appended to across runs.
_FILE_FORMAT = (
    "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s",
    "%Y-%m-%d %H:%M:%S",
)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file, appended to.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.

    A log file that cannot be opened is reported on stderr and skipped;
    file logging is best-effort.
    """
    numeric_level = _parse_level(level)
    fmt, datefmt = _console_format(numeric_level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        try:
            fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            print(f"Cannot open log file {log_file}: {e}", file=sys.stderr)
        else:
            fh.setLevel(file_level)
            fh.setFormatter(logging.Formatter(*_FILE_FORMAT))
            root.addHandler(fh)
            effective_level = min(effective_level, file_level)

    root.setLevel(effective_level)

    logging.raiseExceptions = False


def _console_format(numeric_level: int) -> tuple[str, str | None]:
    for threshold in (logging.DEBUG, logging.INFO):
        if numeric_level <= threshold:
            return _CONSOLE_FORMATS[threshold]
    return _CONSOLE_DEFAULT


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level from CLI flags, then the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
