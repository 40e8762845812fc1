"""Utility modules for lineseek."""

from lineseek.utils.debug import DebugLogger
from lineseek.utils.progress import (
    create_progress_bar,
    log_info,
    log_success,
    log_warning,
    update_progress,
)

__all__ = [
    "DebugLogger",
    "create_progress_bar",
    "update_progress",
    "log_info",
    "log_warning",
    "log_success",
]
