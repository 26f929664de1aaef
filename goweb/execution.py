"""Process and working-directory helpers."""

from __future__ import annotations

import os

__all__ = ["get_exec_directory", "check_process_exists"]


def get_exec_directory() -> str:
    """Return the current working directory with a trailing slash, or ``""``."""
    try:
        return os.getcwd() + "/"
    except OSError:
        return ""


def check_process_exists(pid: int) -> bool:
    """Tell whether a process with ``pid`` exists and can be signalled."""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except (OSError, OverflowError):
        return False
    return True