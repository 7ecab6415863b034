import logging
import sys
import traceback

from colorlog import ColoredFormatter

LOGGER_NAME = "webapp_deployer"

DEBUG_MODE = False


def setup_logger(debug_mode=False):
    """
    Configure the package logger with a colored console handler.

    Every module logs through ``logging.getLogger(__name__)``, so attaching the
    handler to the package logger is enough for all of them.
    """
    global DEBUG_MODE
    DEBUG_MODE = debug_mode

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ColoredFormatter(
            "%(log_color)s[%(levelname)s] %(message)s",
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "red,bg_white",
            }
        ))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    if debug_mode:
        logger.debug("Debug mode is active.")

    return logger


def print_stack_trace():
    """Log the current exception's stack trace when debug mode is enabled."""
    if DEBUG_MODE:
        logger.error(traceback.format_exc())


# Logger defaults to INFO unless reconfigured by the CLI.
logger = setup_logger(debug_mode=DEBUG_MODE)
