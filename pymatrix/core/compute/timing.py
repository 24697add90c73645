"""
Per-phase wall-clock timing for decomposition backends.

A backend starts one Timer per call, wraps each phase of the
factorization in section(), and stores timer.result() in its Result.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Wall-clock timer with named, accumulating phases.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('bidiagonalization'):
            ...
        with timer.section('qr_iteration'):
            ...
        timer.stop()
        timer.result()
        # {'total_seconds': 0.05, 'bidiagonalization': 0.03, 'qr_iteration': 0.02}
    """

    def __init__(self):
        self._phases: dict[str, float] = {}
        self._started_at: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._started_at = time.perf_counter()

    def stop(self) -> None:
        """
        Fix the total elapsed time.

        Raises:
            RuntimeError: If start() was never called
        """
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started_at

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under name; repeated phases add up."""
        began = time.perf_counter()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + (time.perf_counter() - began)

    def result(self) -> dict[str, float]:
        """
        Total and per-phase seconds.

        Raises:
            RuntimeError: If stop() has not been called
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._phases}
