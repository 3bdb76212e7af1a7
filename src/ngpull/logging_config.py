import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that log every detection step at DEBUG
QUIET_LOGGERS = ("charset_normalizer",)


def _handler(handler: logging.Handler, level: int, format_string: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging for ngpull.

    Diagnostics (skipped items, unparsable fields, fetch failures) go to
    stderr so that record JSON on stdout stays machine-readable.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives the same records
        format_string: Optional custom format string for log messages
        force: If True, replace handlers installed by an earlier call

    Returns:
        The configured ``ngpull`` logger
    """
    format_string = format_string or DEFAULT_FORMAT
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("ngpull")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

        logger.addHandler(_handler(logging.StreamHandler(sys.stderr), numeric_level, format_string))
        if log_file:
            logger.addHandler(_handler(logging.FileHandler(log_file), numeric_level, format_string))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False

    return logger
