import logging
import os
import sys

LOGGER_NAME = "audiosplice"


def setup_logger(level: str | None = None):
    """Configure the package logger; AUDIOSPLICE_LOG_LEVEL sets the console level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Console Handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel((level or os.environ.get("AUDIOSPLICE_LOG_LEVEL", "INFO")).upper())

    # Formatter
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s.%(module)s: %(message)s')
    ch.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(ch)

    return logger

logger = setup_logger()
