"""
Logging Configuration - Centralized logging setup

Cung cap logging nhat quan cho toan bo app.
Muc log duoc cau hinh MOT LAN khi khoi dong (setup_logging), lay tu
AppSettings, khong doc lai environment moi lan log.

- Console handler: "[LEVEL] message"
- File handler (optional): RotatingFileHandler (max 5 files, 2MB each)
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from config.paths import APP_NAME

# Logger singleton
_logger: Optional[logging.Logger] = None

# Log rotation config
MAX_LOG_SIZE = 2 * 1024 * 1024  # 2MB per file
MAX_LOG_FILES = 5  # Keep 5 backup files

# "warn" la alias cua "warning" (giong LOG_LEVEL cu)
_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def resolve_level(name: str) -> int:
    """Chuyen ten level (khong phan biet hoa thuong) sang logging level, mac dinh INFO."""
    return _LEVELS.get(name.strip().lower(), logging.INFO)


def get_logger() -> logging.Logger:
    """
    Get hoac tao logger singleton.

    Neu setup_logging() chua duoc goi, logger van hoat dong voi
    level INFO va console handler mac dinh.

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is not None:
        return _logger

    _logger = logging.getLogger(APP_NAME)

    # Avoid duplicate handlers
    if not _logger.handlers:
        _logger.setLevel(logging.INFO)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _logger.addHandler(console_handler)
        _logger.propagate = False

    return _logger


def setup_logging(level: str = "info", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Cau hinh logger process-wide. Goi mot lan khi khoi dong.

    Args:
        level: Ten level (error, warn, info, debug)
        log_dir: Thu muc ghi log file; None = chi log ra console

    Returns:
        Logger da cau hinh
    """
    logger = get_logger()
    numeric_level = resolve_level(level)

    logger.setLevel(numeric_level)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    if log_dir is not None and not any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    ):
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / "app.log",
                maxBytes=MAX_LOG_SIZE,
                backupCount=MAX_LOG_FILES,
                encoding="utf-8",
            )
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            logger.addHandler(file_handler)
        except OSError as e:
            # Log to console if file logging fails
            logger.warning(f"Could not create log file: {e}")

    return logger


def log_error(message: str, exc: Optional[BaseException] = None):
    """Log error voi optional exception details"""
    logger = get_logger()
    if exc:
        logger.error(f"{message}: {exc}", exc_info=logger.isEnabledFor(logging.DEBUG))
    else:
        logger.error(message)


def log_warning(message: str):
    """Log warning"""
    get_logger().warning(message)


def log_info(message: str):
    """Log info"""
    get_logger().info(message)


def log_debug(message: str):
    """Log debug - chi ghi khi level = DEBUG"""
    logger = get_logger()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(message)
