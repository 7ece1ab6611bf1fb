# taskboard/logging_setup.py

import logging
import sys

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """
    Attach a stderr handler to the `taskboard` logger.

    Safe to call more than once; uvicorn keeps its own handlers for access logs.
    """
    logger = logging.getLogger("taskboard")
    logger.setLevel(level)
    if any(getattr(h, "_taskboard", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler._taskboard = True
    logger.addHandler(handler)

    logging.captureWarnings(True)
