"""
Logging configuration for the static optimizer.

Importing the package attaches no handlers. Applications (run_audit.py, or
StaticOptimizer given a log_level) call setup_logger to get console output.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "static_optimizer",
    level: int = logging.WARNING,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: WARNING)
        log_file: Optional file path for logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Handlers are attached once; later calls only adjust the level
    if logger.handlers:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # stderr keeps stdout free for rendered reports
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Args:
        module_name: Name of the module (e.g., 'engine', 'document')

    Returns:
        Child logger instance
    """
    return logging.getLogger(f"static_optimizer.{module_name}")
