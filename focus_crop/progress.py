"""
Progress reporting for focus-crop runs.

Timing lines go to stdout the same way the command line tool has always
reported them:

    - 400x300 in 12 ms
    - 200x200 in 7 ms
    -------------------
    Done in 21 ms

Library callers that want progress without printing use a
progress_callback(current, total) instead, optionally with ProgressTracker.
"""
import sys
import time

SEPARATOR = '-' * 19


def now_ms() -> float:
    return time.time() * 1000


def elapsed_ms(start_ms: float) -> int:
    return int(round(now_ms() - start_ms))


class ProgressReporter:
    """
    Prints per-size and total timings unless quiet.

    Args:
        quiet: Suppress all output
        stream: Where to print (default: sys.stdout at call time)
    """

    def __init__(self, quiet: bool = False, stream=None):
        self.quiet = quiet
        self.stream = stream

    def _print(self, message: str):
        if not self.quiet:
            print(message, file=self.stream or sys.stdout, flush=True)

    def size_done(self, size_token: str, elapsed: int):
        self._print(f"- {size_token} in {elapsed} ms")

    def all_done(self, elapsed: int):
        self._print(SEPARATOR)
        self._print(f"Done in {elapsed} ms")


class ProgressTracker:
    """
    Completed-size count and percentage for one run.

    The HTTP app feeds it from process()'s progress_callback and publishes
    the numbers through /api/status.

    Examples:
        >>> tracker = ProgressTracker(total=3)
        >>> tracker.update(1, 3)
        >>> str(tracker)
        '1/3 (33%)'
    """

    def __init__(self, total: int):
        self.total = total
        self.current = 0
        self.percent = 0

    def update(self, current: int, total: int = None):
        if total is not None:
            self.total = total
        self.current = current
        self.percent = int((current / self.total) * 100) if self.total > 0 else 0

    def is_complete(self) -> bool:
        return self.current >= self.total

    def __str__(self) -> str:
        return f"{self.current}/{self.total} ({self.percent}%)"
