"""
Logging Configuration
Sets up logging for the visualizer's packages.
"""
import logging
import sys
from typing import Optional

# Loggers are named after their modules, so these cover the whole project.
NAMESPACES = ("algorithms", "engine", "grid", "main", "__main__")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the project loggers.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in NAMESPACES:
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Avoid duplicate output when the app factory runs more than once
        if logger.hasHandlers():
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger("main").info("Logging initialized.")
