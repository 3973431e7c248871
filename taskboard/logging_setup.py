from __future__ import annotations

import logging
import sys
from pathlib import Path


class _AccessLogFilter(logging.Filter):
    """
    Keep the console readable:
    - all taskboard logs pass
    - uvicorn access lines only at WARNING+
    - SQLAlchemy engine chatter only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("taskboard."):
            return True
        if name == "uvicorn.access" or name.startswith("sqlalchemy."):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(
    *,
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
) -> None:
    """
    Configure root logging with a console handler and, when ``log_file`` is
    given, a file handler that records everything at DEBUG.

    Call this ONCE, before the application starts serving.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_AccessLogFilter())
    root.addHandler(ch)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
