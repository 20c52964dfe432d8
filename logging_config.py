"""
Process-wide log setup for the tracker.

Records go to stderr because the terminal front end owns stdout. The level
comes from LOG_LEVEL when this module is first imported; call
configure_logging() again to add a log file or change it.
"""

import logging
import os
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Union[int, str] = logging.INFO,
                      log_file: Optional[str] = None) -> None:
    """
    Parameters
    ----------
    level : int or str
        Level number or name, e.g. logging.DEBUG or "WARNING"
    log_file : str, optional
        Also append records to this file
    """
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


configure_logging(os.getenv("LOG_LEVEL", "INFO").upper())
