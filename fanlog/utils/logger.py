"""
Internal logging for fanlog modules

Library code logs through the standard logging hierarchy under the
"fanlog" namespace. Nothing is printed unless the application configures
handlers for it.
"""

import logging

LIBRARY_LOGGER_NAME = "fanlog"

logging.getLogger(LIBRARY_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for a fanlog module

    Args:
        module_name: Name of the module requesting logger (typically __name__)

    Returns:
        Logger under the "fanlog" namespace

    Example:
        from fanlog.utils.logger import get_logger
        logger = get_logger(__name__)
        logger.debug("Detailed debug information")
    """
    if module_name != LIBRARY_LOGGER_NAME and not module_name.startswith(LIBRARY_LOGGER_NAME + "."):
        module_name = f"{LIBRARY_LOGGER_NAME}.{module_name}"
    return logging.getLogger(module_name)
