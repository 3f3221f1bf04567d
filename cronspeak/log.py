"""Logging setup for the command line.

Library modules only create ``logging.getLogger(__name__)`` loggers; nothing
is printed unless an application calls ``setup_logging``.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    logger = logging.getLogger("cronspeak")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
