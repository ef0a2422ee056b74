import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

from ..config import LoggingConfig

PACKAGE_LOGGER = "operr"

def setup_logger(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configures the package logger ("operr"), leaving the root logger alone:
    - Console: config.level
    - File: DEBUG level (config.logs_dir/operr_{timestamp}.log), only if logs_dir is set
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(PACKAGE_LOGGER)

    # Drop handlers from an earlier call so reconfiguring does not duplicate output
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    console_level = logging.getLevelName(config.level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.logs_dir is None:
        logger.setLevel(console_level)
        return logger

    logger.setLevel(logging.DEBUG)
    log_path = Path(config.logs_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    filename = f"operr_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    file_handler = logging.FileHandler(log_path / filename, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
