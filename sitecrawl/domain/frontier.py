import threading
from typing import List, Set


class Frontier:
    """
    Tracks which absolute URLs have been admitted during a crawl.

    The frontier is unbounded: a site of any size must be representable, and
    evicting entries would let a URL be admitted twice. Safe for any number of
    concurrent callers.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._seen: Set[str] = set()

    def try_admit(self, url: str) -> bool:
        """Record `url` as seen and return True if it was not seen before."""
        # The membership test and the insert must share one critical section;
        # splitting them lets two workers both admit the same URL.
        with self._lock:
            if url in self._seen:
                return False
            self._seen.add(url)
            return True

    def snapshot(self) -> List[str]:
        with self._lock:
            return list(self._seen)

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
