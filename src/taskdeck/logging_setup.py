# src/taskdeck/logging_setup.py

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path

_BEARER_RE = re.compile(r"(Bearer\s+)[^\s'\",]+", re.IGNORECASE)


class _RedactBearerFilter(logging.Filter):
    """Mask bearer tokens in any record (ours or a library's) before it reaches a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        if "bearer" in msg.lower():
            record.msg = _BEARER_RE.sub(r"\1***", msg)
            record.args = None
        return True


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable:
    - taskdeck logs pass (level is decided by the handler)
    - httpx/httpcore log every request at INFO: only ERROR+ here
    - Python warnings (captured as 'py.warnings') only ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("taskdeck."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskdeck",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure root logging once, at CLI start.

    Console handler: filtered for interactive use, at console_level.
    File handler: everything at file_level, in <log_dir>/taskdeck.log.

    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskdeck.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    redact = _RedactBearerFilter()

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(redact)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    fh.addFilter(redact)
    root.addHandler(fh)

    logging.captureWarnings(True)

    # httpcore DEBUG dumps raw headers, Authorization included.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
