"""
Wall-clock timing for batch runs.

kalman_filter() wraps each predict and correct phase of a Kalman run in a named
section; tests/benchmark.py uses timed() around single kernel calls.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall run time plus named phases.

    A section entered once per step adds up over the run, so after n steps
    'predict' holds the time of all n time updates together:

        timer = Timer()
        timer.start()
        for u, z in steps:
            with timer.section('predict'):
                kf.predict(u)
            with timer.section('correct'):
                kf.correct(z)
        timer.stop()
        timer.result()
        # {'total_seconds': 0.004, 'predict': 0.001, 'correct': 0.003}
    """

    def __init__(self):
        self._phases: dict[str, float] = {}
        self._t0: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._t0 = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        """Freeze the total. Raises RuntimeError if start() was never called."""
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._t0

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent inside the block to phase `name`."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + (time.perf_counter() - t0)

    def result(self) -> dict[str, float]:
        """
        Timings in seconds, keyed 'total_seconds' and by phase name.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._phases}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Time a block; the timer is stopped on exit, even on error.

        with timed() as timer:
            strassen(a, b)
        timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
