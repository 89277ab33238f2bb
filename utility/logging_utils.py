# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: logging_utils.py
# -----------------------------------------------------------------------------
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog

BASE_LOGGER_NAME = "voice_rag_llm"

CONSOLE_FORMAT = (
    "%(log_color)s%(asctime)s [%(levelname)s] "
    "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
)
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}
MESSAGE_COLORS = {
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "light_red",
    "CRITICAL": "red",
}


def _log_to_file() -> bool:
    return os.getenv("VOICE_LOG_TO_FILE", "1").strip().lower() in ("1", "true", "yes", "y")


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=CONSOLE_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LEVEL_COLORS,
            secondary_log_colors={"message": MESSAGE_COLORS},
            style="%",
        )
    )
    return handler


def _file_handler() -> logging.Handler:
    """Rotating file under VOICE_LOG_FILE (5MB x 5 by default)."""
    log_path = Path(os.getenv("VOICE_LOG_FILE", "./logs/voice_rag.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=int(os.getenv("VOICE_LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        backupCount=int(os.getenv("VOICE_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _create_logger(full_name: str) -> logging.Logger:
    logger = logging.getLogger(full_name)

    # handlers are attached once per name; repeated lookups reuse them
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    if _log_to_file():
        logger.addHandler(_file_handler())

    level_name = os.getenv("VOICE_LOG_LEVEL", "INFO").strip().upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Logger for code that has no class to name it after (scripts, helpers).
    """
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _create_logger(full_name)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Returns a logger whose name includes module + class, e.g.:

      voice_rag_llm.services.VoiceRAGService.VoiceRAGService
      voice_rag_llm.vectorstore.ChromaVoiceVectorStore.ChromaVoiceVectorStore
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return _create_logger(f"{BASE_LOGGER_NAME}.{module}.{classname}")
