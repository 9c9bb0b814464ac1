"""Logging configuration driven by LOG_FILE and LOG_LEVEL."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# LOG_LEVEL values: 0 silent, 1 info, 2 debug
_LEVELS = {
    1: logging.INFO,
    2: logging.DEBUG,
}


def parse_log_level(raw: Optional[str]) -> int:
    """Normalize a LOG_LEVEL value to 0, 1 or 2."""
    try:
        level = int(raw) if raw is not None else 0
    except ValueError:
        return 0
    return max(0, min(level, 2))


def configure_logging(
    log_file: Optional[str] = None,
    level: Optional[int] = None,
    also_stderr: bool = False,
) -> int:
    """
    Configure the root logger.

    Args:
        log_file: Log file path. Defaults to $LOG_FILE.
        level: Verbosity 0-2. Defaults to $LOG_LEVEL.
        also_stderr: Mirror records to stderr when level > 0.

    Returns:
        The normalized level in effect.
    """
    log_file = log_file or os.getenv("LOG_FILE")
    lvl = parse_log_level(os.getenv("LOG_LEVEL")) if level is None else parse_log_level(str(level))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG)

    formatter = logging.Formatter(LOG_FORMAT)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch(exist_ok=True)
        if lvl > 0:
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            file_handler.setLevel(_LEVELS[lvl])
            root.addHandler(file_handler)

    if also_stderr and lvl > 0:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(_LEVELS[lvl])
        root.addHandler(stream_handler)

    if lvl == 0:
        # Nothing attached; keep the last-resort handler from printing warnings
        root.addHandler(logging.NullHandler())

    return lvl
