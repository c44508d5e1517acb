"""
Search Context Module - Lets a caller stop a running search early.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class SearchContext:
    """
    Stop signal and progress hook for one search.

    ExhaustiveSearch polls is_cancelled() before every node it visits and
    unwinds as soon as it returns True. Searches never time out on their own;
    set timeout_sec to add a limit.

    Attributes:
        cancel_flag: Set from any thread to stop the search
        timeout_sec: Seconds after start_time at which the search stops, or None
        start_time: Reference point for timeout_sec (time.time())
        progress_callback: Called as (fraction_done, message) after each first-level branch
    """
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None

    def is_cancelled(self) -> bool:
        """True once cancel() was called or timeout_sec has passed."""
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and self.elapsed_time() > self.timeout_sec:
            return True
        return False

    def cancel(self) -> None:
        """Ask the search to stop at its next node."""
        self.cancel_flag.set()

    def report_progress(self, fraction: float, message: str = "") -> None:
        """Forward progress to progress_callback, if one is set."""
        if self.progress_callback:
            self.progress_callback(fraction, message)

    def elapsed_time(self) -> float:
        """Seconds since start_time."""
        return time.time() - self.start_time
