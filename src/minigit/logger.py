"""
Logging configuration for the minigit package.

Provides centralized logging with configurable levels and handlers. Console
output goes to stderr so that command output on stdout stays machine-readable.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logger(
    name: str = "minigit",
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    console_output: bool = True,
) -> logging.Logger:
    """
    Set up and configure a logger with console and/or file handlers.

    Args:
        name: Logger name (default: "minigit")
        level: Logging level as string ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        log_file: Optional path to log file. If provided, logs are appended to this file.
        console_output: Whether to output logs to stderr (default: True)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("minigit", level="DEBUG", log_file=Path("minigit.log"))
        >>> logger.info("Snapshot started")
    """
    logger = logging.getLogger(name)

    # Close and drop existing handlers to avoid duplicates
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str = "minigit") -> logging.Logger:
    """Get an existing logger instance."""
    return logging.getLogger(name)


_default_logger: Optional[logging.Logger] = None


def get_default_logger() -> logging.Logger:
    """
    Get or create the default minigit logger.

    Returns:
        Default logger instance with WARNING level and stderr output
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = setup_logger()
    return _default_logger


def configure_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    console_output: bool = True,
) -> None:
    """
    Configure the default minigit logger.

    Modules hold a reference obtained from get_default_logger() at import
    time, so the same named logger is reconfigured in place.

    Args:
        level: Logging level as string ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        log_file: Optional path to log file
        console_output: Whether to output logs to stderr (default: True)

    Example:
        >>> configure_logging(level="DEBUG", log_file=Path("minigit.log"))
    """
    global _default_logger
    _default_logger = setup_logger(
        name="minigit",
        level=level,
        log_file=log_file,
        console_output=console_output,
    )
