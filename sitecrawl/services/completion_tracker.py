import enum
import threading
from typing import Optional


class CrawlState(str, enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


class CompletionTracker:
    """Live balance of admitted-but-unfinished crawl tasks.

    `add()` must be called for a URL before it is queued and `finish()` once
    its task body has fully completed, including any admissions it made. The
    crawl is done exactly when the balance returns to zero.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._outstanding = 0
        self._done = threading.Event()

    def add(self) -> None:
        with self._lock:
            if self._done.is_set():
                raise RuntimeError("cannot admit work after the crawl has completed")
            self._outstanding += 1

    def finish(self) -> bool:
        """Account for one finished task; return True if that completed the crawl."""
        with self._lock:
            if self._outstanding <= 0:
                raise RuntimeError("outstanding work counter would go negative")
            self._outstanding -= 1
            if self._outstanding == 0:
                self._done.set()
                return True
            return False

    @property
    def outstanding(self) -> int:
        with self._lock:
            return self._outstanding

    def is_done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)

    def state(self, queued: int) -> CrawlState:
        """Classify progress given how many admitted URLs still wait for dispatch."""
        if self._done.is_set():
            return CrawlState.DONE
        if queued == 0 and self.outstanding > 0:
            return CrawlState.DRAINING
        return CrawlState.RUNNING
