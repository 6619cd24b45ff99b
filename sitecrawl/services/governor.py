import threading


class WorkerGovernor:
    """Counting gate bounding how many fetch/extract tasks run at once.

    Only simultaneous work is bounded; the number of URLs a crawl may process
    is not.
    """

    def __init__(self, total_workers: int):
        if total_workers <= 0:
            raise ValueError("total_workers must be > 0")
        self.capacity = total_workers
        self._sem = threading.BoundedSemaphore(total_workers)
        self._lock = threading.Lock()
        self._in_flight = 0

    def acquire(self) -> None:
        """Block until a slot is free, then take it."""
        self._sem.acquire()
        with self._lock:
            self._in_flight += 1

    def release(self) -> None:
        """Free one slot. Raises ValueError when nothing is held."""
        with self._lock:
            if self._in_flight <= 0:
                raise ValueError("governor released more times than acquired")
            self._in_flight -= 1
        self._sem.release()

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight
