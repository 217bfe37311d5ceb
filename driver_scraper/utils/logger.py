"""
Logging setup for the command line application.
"""

import logging
import sys


LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%dT%H:%M:%S'


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure the root logger to write timestamped lines to standard output.

    Args:
        level: Logging level for the root logger
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
