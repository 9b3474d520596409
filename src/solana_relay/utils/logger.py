# src/solana_relay/utils/logger.py

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: int = logging.NOTSET) -> logging.Logger:
    """Get a named logger.

    Handlers are configured once by the entry point (see ``configure_logging``);
    library modules only ask for their logger.
    """
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level)
    return logger


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
