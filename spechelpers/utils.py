"""
Utility functions for spec helpers.

This module provides helper functions used across the package,
including logging configuration, debugging, and dataset file loading.
"""

import json
import logging
import logging.handlers
import os
import sys
from typing import Any, Optional, TextIO, Union

# Default log format
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)8s] %(message)s (%(name)s:%(lineno)s)"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Environment variable consulted when no explicit level is given
LOG_LEVEL_ENV_VAR = "SPECHELPERS_LOG_LEVEL"

# Log levels dictionary for easier configuration
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_log_level(level: Optional[Union[str, int]] = None, env_var: str = LOG_LEVEL_ENV_VAR) -> int:
    """
    Parse log level from various inputs with priority order:
    1. Explicit level parameter
    2. Environment variable
    3. Default (INFO)

    Args:
        level: Explicit log level (name or constant)
        env_var: Name of environment variable to check

    Returns:
        Log level as an integer constant

    Examples:
        >>> parse_log_level("debug")
        10

        >>> # Fallback to default
        >>> parse_log_level(None, "NONEXISTENT_VAR")
        20
    """
    # Check for explicit level
    if level is not None:
        if isinstance(level, str):
            level_str = level.lower()
            if level_str in LOG_LEVELS:
                return LOG_LEVELS[level_str]
            # Fall through to default if invalid level name
        elif isinstance(level, int):
            return level

    # Check environment variable
    env_level = os.environ.get(env_var)
    if env_level:
        env_level = env_level.lower()
        if env_level in LOG_LEVELS:
            return LOG_LEVELS[env_level]

    return logging.INFO


def configure_logging(
    level: Union[str, int] = "info",
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    console: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure the logging system.

    Sets up the root logger with handlers for console and/or file output.
    Existing root handlers are removed first, so calling it again
    reconfigures logging rather than duplicating output.

    Args:
        level: Log level (debug, info, warning, error, critical) or logging constant
        log_file: Optional path to log file
        log_format: Optional custom log format
        date_format: Optional custom date format
        console: Whether to log to console
        stream: Console stream, defaults to stdout. Commands whose stdout is
            machine-readable pass sys.stderr

    Examples:
        >>> configure_logging()
        >>> configure_logging(level="debug", log_file="/tmp/spechelpers.log")
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:  # Copy, the list is modified in the loop
        root_logger.removeHandler(handler)

    log_level = parse_log_level(level)
    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=log_format or DEFAULT_LOG_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT
    )

    if console:
        console_handler = logging.StreamHandler(stream or sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)

    if log_file:
        ensure_directory_exists(log_file)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    level_name = logging.getLevelName(log_level)
    root_logger.debug(f"Logging configured: level={level_name}")
    if log_file:
        root_logger.debug(f"Log file: {log_file}")


def ensure_directory_exists(file_path: str) -> None:
    """
    Ensure the directory for a file path exists, creating it if necessary.

    Raises:
        IOError: If the directory cannot be created
    """
    directory = os.path.dirname(file_path)
    if directory and not os.path.exists(directory):
        try:
            os.makedirs(directory, exist_ok=True)
        except (IOError, OSError) as e:
            raise IOError(f"Failed to create directory {directory}: {str(e)}")


def read_json_file(file_path: str) -> Any:
    """
    Read and parse a JSON file.

    Args:
        file_path: Path to the JSON file

    Returns:
        Parsed JSON content (typically a dict or list)

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
        IOError: If there's an error reading the file
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"JSON file not found: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        # Re-raise with the failing file in the message
        raise json.JSONDecodeError(
            f"Invalid JSON in {file_path}: {e.msg}",
            e.doc,
            e.pos
        )
    except IOError as e:
        raise IOError(f"Error reading JSON file {file_path}: {str(e)}")


def debug_object(obj: Any, label: Optional[str] = None) -> None:
    """
    Log detailed information about an object at DEBUG level.

    Dictionaries are pretty-printed as JSON and long lists are logged one
    item per line, which keeps datasets readable in logs.

    Args:
        obj: The object to debug
        label: Optional descriptive label for the logged object

    Examples:
        >>> debug_object({"low": 1, "high": [2, 3]}, "Dataset")
    """
    logger = logging.getLogger()

    if logger.level > logging.DEBUG:
        return

    prefix = f"{label}: " if label else ""
    obj_type = type(obj).__name__

    try:
        if isinstance(obj, dict):
            representation = json.dumps(obj, indent=2, default=str)
        elif isinstance(obj, (list, tuple)):
            if len(obj) > 5:
                items = [f"  {i}: {repr(item)}" for i, item in enumerate(obj)]
                representation = "[\n" + ",\n".join(items) + "\n]"
            else:
                representation = repr(obj)
        elif isinstance(obj, Exception):
            representation = f"{type(obj).__name__}: {str(obj)}"
        else:
            representation = repr(obj)

        logger.debug(f"{prefix}Object of type {obj_type}: {representation}")
    except Exception as e:
        # Fallback if object representation raises an error
        logger.debug(f"{prefix}Object of type {obj_type}: <error during representation: {str(e)}>")
