"""
Provides UTC timestamped logging helpers used by loaders and generators.
"""

from datetime import datetime, UTC
from typing import Optional


def _utc_timestamp() -> str:
    """
    Generate the current UTC timestamp string.

    Returns:
        str: Timestamp formatted as YYYY-MM-DD HH:MM:SS in UTC.
    """
    return datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")


def log_section_start(section: str) -> None:
    """
    Log the start of a section.

    Args:
        section (str): Description of the section that is beginning.
    """
    print(f"[{_utc_timestamp()}] Starting: {section}")


def log_section_complete(section: str, details: Optional[str] = None) -> None:
    """
    Log the completion of a section.

    Args:
        section (str): Description of the section that finished.
        details (Optional[str]): Optional extra context to append to the message.
    """
    suffix = f" - {details}" if details else ""
    print(f"[{_utc_timestamp()}] Completed: {section}{suffix}")


def log_progress(
    section: str,
    message: str,
    *,
    end: str = "\n",
    flush: bool = False,
) -> None:
    """
    Log an in-progress update for a section.

    Args:
        section (str): Description of the section that is running.
        message (str): Progress message to display for the section.
        end (str): Print function end parameter for controlling newline behavior.
        flush (bool): Whether to force flush the output buffer.
    """
    print(f"[{_utc_timestamp()}] {section}: {message}", end=end, flush=flush)


def log_progress_bar(section: str, done: int, total: int, bar_width: int = 50) -> None:
    """
    Redraw a single-line progress bar whenever the percentage changes.

    Args:
        section (str): Label printed in front of the bar.
        done (int): Number of items processed so far (1-based).
        total (int): Total number of items.
        bar_width (int): Width of the bar in characters.
    """
    if total <= 0:
        return
    pct = int((done / total) * 100)
    prev_pct = int(((done - 1) / total) * 100) if done > 1 else -1
    if pct != prev_pct or done == total:
        filled = int(bar_width * pct / 100)
        bar = '|' * filled + ' ' * (bar_width - filled)
        print(f"\r      {section}: {pct:3d}% |{bar}|", end='', flush=True)


def log_error(section: str, error: Exception | str) -> None:
    """
    Log an error that occurred during a section.

    Args:
        section (str): Description of the section where the error occurred.
        error (Exception | str): Exception instance or error message to record.
    """
    print(f"[{_utc_timestamp()}] Error in {section}: {error}")


def clear_progress_line() -> None:
    """
    Clear the most recent progress bar line using an ANSI escape code.
    """
    print("\r\033[K", end='', flush=True)
