"""
Logging configuration for ZelUnit.

Two output formats:
  - **human** – coloured, single-line, readable
  - **json**  – newline-delimited JSON for log aggregators

The library itself only emits DEBUG records from the ``zelunit_*`` loggers
(rejected codes, rates and JSON payloads); applications decide where they go.

Usage:
    from zelunit_core.logging_config import setup_logging
    setup_logging(level="DEBUG", fmt="json", log_file="zelunit.log")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from zelunit_core.config import LoggingConfig

# Loggers the package itself writes to.
LIBRARY_LOGGERS = ("zelunit_unit", "zelunit_config")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """Coloured single-line format. Colours are dropped when ``colour=False``."""

    COLOURS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, colour: bool = True):
        super().__init__()
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        if self.colour:
            start, end = self.COLOURS.get(record.levelname, ""), self.RESET
        else:
            start = end = ""
        line = f"{start}{ts} [{record.levelname:<7}]{end} {record.name}: {record.getMessage()}"
        if record.exc_info and record.exc_info[1]:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    fmt: str = "human",
    log_file: Optional[str] = None,
    library_level: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the root logger and return it.

    Parameters
    ----------
    level : str
        One of DEBUG, INFO, WARNING, ERROR, CRITICAL.  Unknown names fall
        back to INFO.
    fmt : str
        ``"human"`` or ``"json"``.
    log_file : str, optional
        Also write records to this file, always as JSON.
    library_level : str, optional
        Separate level for the ``zelunit_*`` loggers, e.g. ``"WARNING"`` to
        silence rejected-input DEBUG records while the application logs at
        DEBUG.  ``None`` leaves them following the root level.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers when called twice
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        console.setFormatter(JSONFormatter())
    else:
        console.setFormatter(HumanFormatter(colour=sys.stderr.isatty()))
    root.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path))
        fh.setFormatter(JSONFormatter())
        root.addHandler(fh)

    for name in LIBRARY_LOGGERS:
        if library_level:
            logging.getLogger(name).setLevel(getattr(logging, library_level.upper(), logging.INFO))
        else:
            logging.getLogger(name).setLevel(logging.NOTSET)

    return root


def setup_logging_from_config(cfg: LoggingConfig) -> logging.Logger:
    """Apply the ``[logging]`` section of a loaded config."""
    return setup_logging(
        level=cfg.level,
        fmt=cfg.format,
        log_file=cfg.file,
        library_level=cfg.library_level,
    )
