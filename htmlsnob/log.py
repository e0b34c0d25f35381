from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import sys
from typing import TextIO

LOGGER_NAME = "htmlsnob"


@dataclass(frozen=True, slots=True)
class LogConfig:
    log_level: int = logging.WARNING
    console_level: int | None = None
    log_file: Path | str | None = None
    file_level: int | None = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: LogConfig | None = None, *, stream: TextIO | None = None) -> logging.Logger:
    """Attach handlers to the package logger. Calling it again replaces them."""
    if config is None:
        config = LogConfig()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)
    logger.propagate = False

    # Clear any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    # Console handler; stdout belongs to reports and the editor protocol
    ch = logging.StreamHandler(stream if stream is not None else sys.stderr)
    ch.setLevel(config.console_level if config.console_level is not None else config.log_level)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if config.log_file is not None:
        fh = logging.FileHandler(config.log_file, encoding="utf-8")
        fh.setLevel(config.file_level if config.file_level is not None else config.log_level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger
