"""
Logging utilities for retroterm.
Provides error logging with timestamps and traceback support.

curses owns the terminal while the launcher runs, and the emulator owns it
while a game runs, so errors go to a file. stdout is only used when that
file cannot be written.
"""

import os
import sys
from datetime import datetime
from typing import List, Optional

from constants import APP_NAME, APP_VERSION, CONFIG_FILE, LOG_FILE

SEPARATOR = "-" * 80

# Module-level log file path
_log_file: str = LOG_FILE


def get_log_file() -> str:
    """Get the current log file path."""
    return _log_file


def set_log_file(path: str) -> None:
    """
    Point the error log at a different file.

    Args:
        path: New log file path
    """
    global _log_file
    _log_file = path


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _write(text: str, mode: str) -> bool:
    log_dir = os.path.dirname(_log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    with open(_log_file, mode) as f:
        f.write(text)
    return True


def format_error(
    error_msg: str,
    error_type: Optional[str] = None,
    traceback_str: Optional[str] = None,
) -> str:
    """Render one error block as it appears in the log."""
    lines = [f"[{_timestamp()}] ERROR: {error_msg}"]
    if error_type:
        lines.append(f"Type: {error_type}")
    if traceback_str:
        lines.append(f"Traceback:\n{traceback_str.rstrip()}")
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"


def log_error(
    error_msg: str,
    error_type: Optional[str] = None,
    traceback_str: Optional[str] = None,
) -> None:
    """
    Log an error message to the log file.

    Args:
        error_msg: The error message to log
        error_type: Optional error type/class name
        traceback_str: Optional traceback string
    """
    log_message = format_error(error_msg, error_type, traceback_str)
    try:
        _write(log_message, "a")
    except OSError as e:
        print(f"Failed to write to log file: {e}")
        print(log_message)


def session_header() -> List[str]:
    """Lines describing this launcher session."""
    return [
        f"{APP_NAME} {APP_VERSION} error log - started at {_timestamp()}",
        f"Python version: {sys.version.split()[0]}",
        f"Platform: {sys.platform}",
        f"Config file: {CONFIG_FILE}",
        f"Terminal: {os.environ.get('TERM') or 'unset (curses needs TERM)'}",
        SEPARATOR,
    ]


def init_log_file() -> bool:
    """
    Start a fresh log file for this session.

    Returns:
        True if successful, False otherwise
    """
    try:
        return _write("\n".join(session_header()) + "\n", "w")
    except OSError as e:
        print(f"Failed to initialize log file: {e}")
        return False
