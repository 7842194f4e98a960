"""
TASKFLOW - Logging Setup
========================
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Send taskflow logs to stderr. Call once, before the first log line.
    Third-party loggers only surface warnings and above.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("taskflow").setLevel(level)
