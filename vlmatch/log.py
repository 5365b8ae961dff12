import logging
import sys

from vlmatch.constants import APP_NAME


def setup_logging(level: str = "INFO") -> None:
    """
    Configure application-wide logging with consistent formatting.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Report goes to stdout, so diagnostics stay on stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Returns:
        Configured logger instance
    """
    if name is None:
        name = APP_NAME
    return logging.getLogger(name)

