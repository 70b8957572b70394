"""
Logging Configuration
Sets up the loggers for the application packages.
"""
import logging
import sys
from typing import Optional, Union

# Package whose module loggers we own
LOGGER_NAMESPACES = ("springcurve",)


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the loggers for the springcurve package.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG")
        log_file: Optional path to save logs to a file.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    file_handler = None
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)

    for namespace in LOGGER_NAMESPACES:
        logger = logging.getLogger(namespace)
        logger.setLevel(level)

        # Avoid duplicate logs during reload/restart
        if logger.hasHandlers():
            logger.handlers.clear()

        logger.addHandler(console_handler)
        if file_handler is not None:
            logger.addHandler(file_handler)

    logging.getLogger("springcurve").info("Logging initialized.")
