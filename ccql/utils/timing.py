# ccql/utils/timing.py
"""
Timing helpers for the clustering pipeline.
"""
import time
from typing import Optional

from ..logging_config import get_logger

logger = get_logger('timing')


class Timer:
    """
    Context manager for timing code blocks.

    Usage:
        with Timer("Count occurrences") as timer:
            ...
        timer.elapsed
    """

    def __init__(self, name: str, log_level: str = "DEBUG"):
        self.name = name
        self.log_level = log_level.upper()
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def _log(self, message: str) -> None:
        log_func = getattr(logger, self.log_level.lower(), logger.debug)
        log_func(message)

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        self._log(f"START: {self.name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        elapsed = self.end_time - self.start_time

        if exc_type is not None:
            logger.error(f"FAILED: {self.name} (after {elapsed:.3f}s) - {exc_type.__name__}: {exc_val}")
        else:
            self._log(f"DONE: {self.name} ({elapsed:.3f}s)")

        return False

    @property
    def elapsed(self) -> float:
        """Elapsed time in seconds (running total while inside the block)."""
        if self.start_time is None:
            return 0.0
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time
