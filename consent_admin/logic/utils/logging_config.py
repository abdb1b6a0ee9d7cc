"""Logging setup for the consent administration service."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_DIR_ENV_VAR = "CONSENT_ADMIN_LOG_DIR"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_basic_logging(
    level: int = logging.INFO,
    log_to_file: bool = False,
    log_dir: str = "logs",
    console_output: bool = True,
    filename: str = "consent_admin.log",
) -> Optional[Path]:
    """
    Configure root logging handlers.

    CONSENT_ADMIN_LOG_DIR overrides log_dir. Returns the log file path when
    file logging is enabled.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    if console_output:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    log_file: Optional[Path] = None
    if log_to_file:
        directory = Path(os.environ.get(LOG_DIR_ENV_VAR) or log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / filename
        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return log_file
