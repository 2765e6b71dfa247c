"""
Logging configuration for x402-mantle
"""

import logging
import sys

PACKAGE_LOGGER = "x402_mantle"

LOG_FORMAT = "%(asctime)s - %(levelname)-8s %(name)s %(filename)s:%(lineno)d %(message)s"


def setup_logging(
    level: int = logging.INFO,
    stream=None,
    propagate: bool = False,
) -> logging.Logger:
    """
    Send x402_mantle log records to a console handler.

    Only the package logger is configured; the root logger and the
    application's own handlers are left alone. The library never calls this
    itself.

    Args:
        level: Logging level (default: INFO)
        stream: Output stream (default: sys.stdout)
        propagate: Also pass records on to the root logger's handlers

    Returns:
        The configured package logger
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = propagate

    # Replace handlers so repeated calls don't duplicate output
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the x402_mantle namespace ("payment" -> "x402_mantle.payment")"""
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
