"""Logging configuration for the publisher."""

import logging
import logging.handlers
import sys

from .path_manager import PathManager


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record):
        # Colored in place and restored, so file handlers sharing the record stay plain
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
            )
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    log_to_console: bool = True,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Set up logging configuration for the publisher.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files
        log_to_console: Whether to log to console
        max_file_size: Maximum size of log files before rotation
        backup_count: Number of backup log files to keep
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)

        if sys.stderr.isatty():
            console_formatter = ColoredFormatter(
                fmt="%(asctime)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
            )
        else:
            console_formatter = logging.Formatter(
                fmt="%(asctime)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
            )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_to_file:
        try:
            log_dir = PathManager.get_log_dir()
            log_dir.mkdir(parents=True, exist_ok=True)

            file_formatter = logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )

            publish_handler = logging.handlers.RotatingFileHandler(
                log_dir / "publish.log",
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding="utf-8",
            )
            publish_handler.setLevel(numeric_level)
            publish_handler.setFormatter(file_formatter)
            root_logger.addHandler(publish_handler)

            # Every git invocation, regardless of the console level
            git_logger = logging.getLogger("pages_publisher.services.git_service")
            for handler in git_logger.handlers[:]:
                git_logger.removeHandler(handler)
                handler.close()

            git_handler = logging.handlers.RotatingFileHandler(
                log_dir / "git_operations.log",
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding="utf-8",
            )
            git_handler.setLevel(logging.DEBUG)
            git_handler.setFormatter(file_formatter)
            git_logger.addHandler(git_handler)
            git_logger.setLevel(logging.DEBUG)
            git_logger.propagate = True

        except OSError as e:
            logging.getLogger(__name__).error(f"Failed to set up file logging: {e}")

    logger = logging.getLogger(__name__)
    logger.debug(
        f"Logging configured - Level: {level}, File: {log_to_file}, Console: {log_to_console}"
    )


def set_log_level(level: str) -> None:
    """
    Change the logging level for all handlers.

    Args:
        level: New logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)

    logging.getLogger(__name__).debug(f"Log level changed to {level}")
