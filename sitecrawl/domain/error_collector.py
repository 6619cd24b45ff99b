import threading
from typing import List

from sitecrawl.domain.crawl_error import CrawlError


class ErrorCollector:
    """Thread-safe collection of per-link crawl failures, inspected once the crawl settles."""

    def __init__(self):
        self._lock = threading.Lock()
        self._errors: List[CrawlError] = []

    def record(self, error: CrawlError) -> None:
        with self._lock:
            self._errors.append(error)

    def snapshot(self) -> List[CrawlError]:
        with self._lock:
            return list(self._errors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._errors)
