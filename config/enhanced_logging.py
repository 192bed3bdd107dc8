"""
Enhanced Logging Utility Module
Provides colored console logging with file path tracking, line numbers,
optional timestamped log files, and truncation of very long messages.
"""

import datetime
import logging
import os
import sys
import tempfile
import time
from functools import wraps
from pathlib import Path

# ======== Color Configuration ========
COLORS = {
    # Log levels
    "DEBUG": "\033[38;5;39m",  # Blue
    "INFO": "\033[38;5;34m",  # Green
    "WARNING": "\033[38;5;214m",  # Orange
    "ERROR": "\033[38;5;196m",  # Red
    "CRITICAL": "\033[48;5;196;38;5;231m",  # White on Red
    # Components
    "TIMESTAMP": "\033[38;5;246m",  # Dark Gray
    "PATH": "\033[1;38;5;93m",  # Bold Purple
    "FILE": "\033[1;38;5;63m",  # Bold Blue
    "MSG_CONTENT": "\033[38;5;255m",  # White
    "RESET": "\033[0m",
}

# Maximum log message length before truncation
MAX_MSG_LENGTH = 3000

CONSOLE_FORMAT = (
    "%(color_timestamp)s%(asctime)s%(color_reset)s "
    "%(color_path)s%(directory)s/%(color_reset)s"
    "%(color_file)s%(filename)s:%(lineno)d%(color_reset)s "
    "%(color_level)s[%(levelname).1s]%(color_reset)s "
    "%(color_msg_content)s%(message)s%(color_reset)s"
)

FILE_FORMAT = "%(asctime)s %(directory)s/%(filename)s:%(lineno)d [%(levelname).1s] %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_root_logger_initialized = False


def get_log_directory(log_path=None):
    """
    Get the log directory: explicit path, then LOG_PATH, then ~/logs/googleauth,
    then the system temp directory.
    """
    log_path = log_path or os.getenv("LOG_PATH")
    if log_path:
        return Path(log_path)

    try:
        return Path.home() / "logs" / "googleauth"
    except RuntimeError:
        # No resolvable home directory
        return Path(tempfile.gettempdir()) / "googleauth_logs"


def _decorate_record(record, use_colors):
    """Attach path and color attributes used by the format strings."""
    cwd = os.getcwd()
    rel_pathname = record.pathname
    if rel_pathname.startswith(cwd):
        rel_pathname = rel_pathname[len(cwd) + 1:]
    record.directory = os.path.dirname(rel_pathname) or "."

    for color_name, color_code in COLORS.items():
        setattr(record, f"color_{color_name.lower()}", color_code if use_colors else "")
    record.color_level = COLORS.get(record.levelname, COLORS["INFO"]) if use_colors else ""

    if isinstance(record.msg, str) and len(record.msg) > MAX_MSG_LENGTH:
        record.msg = record.msg[: MAX_MSG_LENGTH - 3] + "..."


class ColoredFormatter(logging.Formatter):
    """Formatter that applies colors and path information to log records."""

    def __init__(self, fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT, use_colors=True, stream=None):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and self._should_use_colors(stream or sys.stderr)

    @staticmethod
    def _should_use_colors(stream):
        """Check if the terminal supports colors"""
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record):
        _decorate_record(record, self.use_colors)
        return super().format(record)


class PlainFormatter(logging.Formatter):
    """Formatter for log files: same layout as the console, no colors."""

    def __init__(self, fmt=FILE_FORMAT, datefmt=DATE_FORMAT):
        super().__init__(fmt, datefmt)

    def format(self, record):
        _decorate_record(record, use_colors=False)
        return super().format(record)


def _create_log_file(log_path=None):
    """Create a timestamped log file path, or None if the directory is not writable."""
    now = datetime.datetime.now()
    daily_log_dir = get_log_directory(log_path) / now.strftime("%Y-%m-%d")
    try:
        daily_log_dir.mkdir(parents=True, exist_ok=True)
        log_file = daily_log_dir / f"googleauth_{now.strftime('%H-%M-%S')}.log"
        log_file.touch()
    except OSError as e:
        print(
            f"Warning: Cannot create log files ({e}). Using console logging only.",
            file=sys.stderr,
        )
        return None
    return log_file


def setup_logger(level=None, log_to_file=None, log_path=None, force=False):
    """
    Set up enhanced logging on the root logger and return it.

    Args:
        level: Logging level (defaults to LOG_LEVEL env var or INFO)
        log_to_file: Also write a timestamped log file (defaults to LOG_TO_FILE env var)
        log_path: Directory for log files (defaults to LOG_PATH env var)
        force: Reconfigure even if already initialized

    Returns:
        logging.Logger: The root logger instance
    """
    global _root_logger_initialized

    if _root_logger_initialized and not force:
        return logging.getLogger()

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if log_to_file is None:
        log_to_file = os.getenv("LOG_TO_FILE", "false").lower() in ("true", "1", "yes", "on")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(stream=console_handler.stream))
    root_logger.addHandler(console_handler)

    log_file = _create_log_file(log_path) if log_to_file else None
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(PlainFormatter())
        root_logger.addHandler(file_handler)

    _root_logger_initialized = True

    root_logger.debug(f"Enhanced logger initialized (file: {log_file or 'disabled'})")
    return root_logger


def get_logger(name=None):
    """
    Get a named logger instance, setting up the root logger on first use.

    Args:
        name (str, optional): Name for the logger. Defaults to None.

    Returns:
        logging.Logger: Named logger instance
    """
    if not _root_logger_initialized:
        setup_logger()

    return logging.getLogger(name)


def log_execution_time(func):
    """
    Decorator that logs function execution time.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        start_time = time.time()

        logger.debug(f"Starting {func.__name__}")

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                f"Failed {func.__name__} after {execution_time:.3f}s: {str(e)}"
            )
            raise

        execution_time = time.time() - start_time
        logger.debug(f"Completed {func.__name__} in {execution_time:.3f}s")
        return result

    return wrapper
