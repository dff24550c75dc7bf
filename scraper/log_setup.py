import logging
from datetime import datetime
from pathlib import Path

import config

LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s"
)


def setup_logger(name: str, log_dir: str = None) -> logging.Logger:
    """
    Configure a component logger with timestamped file output.

    Handlers are attached only the first time a given logger name is
    requested, so repeated construction of scrapers and fetchers reuses
    the same log file.

    Args:
        name (str): Logger name, also used as the log file prefix
        log_dir (str): Directory for log files, defaults to config.LOG_DIR

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.LOG_LEVEL.upper(), logging.DEBUG))

    # File Handler
    if not logger.handlers:
        logs_dir = Path(log_dir or config.LOG_DIR)
        logs_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"{name}_{timestamp}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger
