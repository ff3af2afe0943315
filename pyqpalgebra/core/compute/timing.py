"""
Execution timing utilities.

Used by threshold calibration to compare the internal kernel against a vendor
mat-vec. Handles CUDA synchronization so GPU launches are measured to
completion rather than to enqueue.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator


def _synchronize(enabled: bool) -> None:
    """Block until queued CUDA work finishes, when enabled."""
    if enabled:
        import torch
        if torch.cuda.is_available():
            torch.cuda.synchronize()


class Timer:
    """
    Accumulating timer with optional CUDA synchronization.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('kernel_nnz_64'):
            backend.apply(store, desc, x, y, 1.0, 0.0)

        timer.stop()
        timer.result()
        # {'total_seconds': 0.002, 'kernel_nnz_64': 0.0004}
    """

    def __init__(self, sync_cuda: bool = False):
        """
        Args:
            sync_cuda: If True, synchronize CUDA before timing measurements.
                       Required for accurate GPU timing.
        """
        self._sync_cuda = sync_cuda
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def _sync(self) -> None:
        _synchronize(self._sync_cuda)

    def start(self) -> None:
        """Start the overall timer."""
        self._sync()
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the overall timer."""
        self._sync()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time a named section. Repeated sections accumulate.
        """
        self._sync()
        start = time.perf_counter()
        try:
            yield
        finally:
            self._sync()
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """
        Get timing results.

        Returns:
            Dictionary with 'total_seconds' and all section timings

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result


def best_time(fn: Callable[[], object], repeats: int, sync_cuda: bool = False) -> float:
    """
    Run fn `repeats` times and return the fastest wall time in seconds.

    The minimum is used rather than the mean: for sub-millisecond calls the
    noise is one-sided (interrupts, cache misses), never negative.
    """
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")
    best = float('inf')
    for _ in range(repeats):
        _synchronize(sync_cuda)
        start = time.perf_counter()
        fn()
        _synchronize(sync_cuda)
        best = min(best, time.perf_counter() - start)
    return best


@contextmanager
def timed(sync_cuda: bool = False) -> Iterator[Timer]:
    """
    Context manager for simple timing.

    Usage:
        with timed() as timer:
            report = calibrate_nnz_threshold()
        print(f"Took {timer.result()['total_seconds']:.3f}s")
    """
    timer = Timer(sync_cuda=sync_cuda)
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
