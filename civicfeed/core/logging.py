"""Process-wide logging setup: console always, rotating file when LOG_DIR is set."""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

LOGGER_NAME = "civicfeed"


def setup_logging(level_name: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(module)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    # create_app() may run more than once per process (tests)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, "civicfeed.log")
        file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized (level=%s, dir=%s)", logging.getLevelName(level), log_dir)
    return logger
