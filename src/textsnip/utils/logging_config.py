# -*- coding: utf-8 -*-
"""
src/textsnip/utils/logging_config.py

Centralized logging configuration for the application.
This should be called only once at application startup.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME = "textsnip.log"
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5

_logging_configured = False


def setup_logging(log_level: int = logging.INFO, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure logging for the entire application.

    Console output honours `log_level`; the rotating log file always records
    DEBUG so a bug report can include the full trace of the last captures.

    Args:
        log_level: Console logging level (default: logging.INFO)
        log_dir: Directory for log files. Console only when omitted.

    Returns:
        Configured root logger
    """
    global _logging_configured

    root = logging.getLogger()
    if _logging_configured:
        return root

    root.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT)

    # Clear existing handlers to prevent duplicate logging
    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_dir is not None:
        try:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                Path(log_dir) / LOG_FILENAME,
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            root.warning(f"File logging disabled, could not open {log_dir}: {e}")

    # Third-party libraries are chatty at DEBUG.
    for noisy in ("PIL", "easyocr", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    root.info("Logging system initialized")
    _logging_configured = True
    return root
