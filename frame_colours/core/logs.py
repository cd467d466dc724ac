"""Logging setup for the frame-colours CLI."""

import logging

LOG_FORMAT = '%(levelname)s: %(name)s: %(message)s'


def setup_logging(level: str = 'WARNING') -> int:
    """Configure a stderr handler at the named level and return the numeric level.

    Unknown level names fall back to WARNING.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
        logging.warning(f'Unknown log level {level!r}. Falling back to WARNING.')
        return logging.WARNING
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
    return numeric
