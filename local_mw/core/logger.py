"""Logging configuration and utilities."""

import os
import sys
import logging
from datetime import datetime
from typing import Optional

LOGGER_NAME = 'local_mw'


def setup_logging(
    operation: str = "check",
    verbose: bool = False,
    log_dir: Optional[str] = None
) -> logging.Logger:
    """Configure logging to both file and console.

    Args:
        operation: Name of the operation for log filename
        verbose: Emit per-step DEBUG diagnostics
        log_dir: Directory for log files (default: ./logs)

    Returns:
        Configured logger instance
    """
    # Create logs directory if it doesn't exist
    logs_dir = log_dir or os.path.join(os.getcwd(), 'logs')
    os.makedirs(logs_dir, exist_ok=True)

    # Create timestamp-based log filename
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_file = os.path.join(logs_dir, f'local_mw_{operation}_{timestamp}.log')

    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ],
        force=True  # Reset any existing configuration
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.info(f"Starting local_mw {operation} operation")
    logger.info(f"Log file: {log_file}")
    if verbose:
        logger.info("Verbose mode enabled")

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        Logger instance
    """
    return logging.getLogger(LOGGER_NAME)
