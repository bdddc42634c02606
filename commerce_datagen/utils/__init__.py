"""
Utility helpers shared across the generation package.
"""

from .logging_utils import (
    log_section_start,
    log_section_complete,
    log_progress,
    log_progress_bar,
    log_error,
    clear_progress_line,
)

__all__ = [
    "log_section_start",
    "log_section_complete",
    "log_progress",
    "log_progress_bar",
    "log_error",
    "clear_progress_line",
]
