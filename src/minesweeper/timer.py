"""
Time tracking for Minesweeper sessions.

The engine never owns a running timer. It stores start and end stamps
read from an injected clock and derives elapsed time on demand.
"""
import time
from typing import Callable

# Zero-argument callable returning milliseconds from a non-decreasing source
Clock = Callable[[], int]


def monotonic_ms() -> int:
    """Default clock: milliseconds from the monotonic system clock."""
    return time.monotonic_ns() // 1_000_000


def elapsed_seconds(start_ms: int, end_ms: int) -> int:
    """Whole seconds between two millisecond stamps, never negative."""
    return max(0, (end_ms - start_ms) // 1000)
