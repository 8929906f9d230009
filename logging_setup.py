"""
logging_setup.py — Logging Initialisation
==========================================
Root logger gets a size-rotated file handler plus a console handler.
Every module logs through `logging.getLogger(__name__)`; nothing is
configured at import time.

    from logging_setup import init_logging
    init_logging()            # once, from the entry point
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


def _default_log_dir() -> Path:
    override = os.getenv("ALGOVIZ_LOG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".algoviz" / "logs"


def _resolve_level(level_name: Optional[str]) -> int:
    name = (level_name or os.getenv("ALGOVIZ_LOG_LEVEL", "INFO")).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO
    return level


def init_logging(level_name: Optional[str] = None, log_dir: Optional[Path] = None,
                 app_name: str = "algoviz") -> Path:
    """Initialise logging and return the log file path."""
    log_dir = log_dir or _default_log_dir()
    log_path = log_dir / "app.log"
    level = _resolve_level(level_name)

    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=2_000_000,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
    except OSError:
        logging.getLogger(app_name).warning("Cannot write log file under %s", log_dir)

    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    ):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    logging.getLogger(app_name).info("Logging initialized at %s", log_path)
    return log_path


def set_console_level(level: int) -> None:
    """Adjust console (stderr) handler level."""
    root = logging.getLogger()
    for handler in root.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            handler.setLevel(level)
