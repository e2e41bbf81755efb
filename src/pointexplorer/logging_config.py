"""
Logging Configuration
Sets up the 'pointexplorer' logger for CLI runs and tests.
"""
import logging
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def resolve_level(level: Union[int, str]) -> int:
    """Accepts logging constants or names such as 'debug' / 'WARNING'."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'pointexplorer' logger.

    Log records go to stderr so that data printed to stdout (e.g. --summary)
    stays machine-readable.

    Args:
        level: Logging level, as a constant or a level name.
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    level = resolve_level(level)
    logger = logging.getLogger("pointexplorer")
    logger.setLevel(level)

    # Repeated CLI runs in one process must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
