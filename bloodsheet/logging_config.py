"""Centralized logging configuration for the settlement engine."""

import logging
import sys
from datetime import datetime
from pathlib import Path


def setup_logging(
    log_dir: Path | None = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the 'bloodsheet' logger hierarchy.

    Every engine module logs through a child of this logger, so one call
    covers the ledger, resolvers and I/O helpers.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: INFO)
        log_to_file: Whether to write a timestamped log file
        log_to_console: Whether to log to stdout

    Returns:
        Configured logger instance

    Example:
        from bloodsheet.logging_config import setup_logging
        logger = setup_logging(log_to_file=False)
        logger.info("Settling round")
    """
    logger = logging.getLogger('bloodsheet')
    logger.setLevel(level)

    # Repeated calls replace handlers rather than stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    if log_to_file:
        if log_dir is None:
            log_dir = Path('logs')
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f'bloodsheet_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = 'bloodsheet') -> logging.Logger:
    """Get a logger in the bloodsheet hierarchy."""
    if name != 'bloodsheet' and not name.startswith('bloodsheet.'):
        name = f'bloodsheet.{name}'
    return logging.getLogger(name)
