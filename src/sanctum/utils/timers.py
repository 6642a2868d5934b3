"""Wall-clock timer helpers.

Timers are recomputed from a stored start timestamp (epoch milliseconds)
on every read, so they stay correct if the process sleeps in between.
"""

import time


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def session_elapsed_seconds(start_time: int, current_ms: int | None = None) -> int:
    """Whole seconds since a session started, never negative."""
    if current_ms is None:
        current_ms = now_ms()
    return max(0, (current_ms - start_time) // 1000)


def rest_remaining_seconds(
    started_at: int, duration: int, current_ms: int | None = None
) -> int:
    """Seconds left on a rest timer, clamped at zero."""
    if current_ms is None:
        current_ms = now_ms()
    elapsed = (current_ms - started_at) // 1000
    return max(0, duration - elapsed)


def format_countdown(seconds: int) -> str:
    """Format a countdown as M:SS, e.g. "1:05"."""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins}:{secs:02d}"


def format_elapsed(seconds: int) -> str:
    """Format elapsed time as MM:SS, or H:MM:SS from one hour up."""
    hrs, rem = divmod(max(0, seconds), 3600)
    mins, secs = divmod(rem, 60)
    if hrs > 0:
        return f"{hrs}:{mins:02d}:{secs:02d}"
    return f"{mins:02d}:{secs:02d}"
