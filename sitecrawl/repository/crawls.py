from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, MutableMapping, Optional

from sitecrawl.domain.metadata import CrawlMetadata
from sitecrawl.exceptions import NoDatastoreError, RecordExistsError, RecordNotFoundError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CrawlsRepository:
    """Thread-safe in-memory store of completed crawls, keyed by crawl id.

    The backing mapping is injected so the process can share one store across
    repositories; records are copied in and out so callers never mutate
    stored state.
    """

    def __init__(self, store: Optional[MutableMapping[str, CrawlMetadata]], clock: Callable[[], datetime] = _utcnow):
        if store is None:
            raise NoDatastoreError()
        self._store = store
        self._clock = clock
        self._lock = threading.Lock()

    def save(self, record: CrawlMetadata) -> CrawlMetadata:
        """Store `record`, stamping its `created_at`."""
        with self._lock:
            if record.id in self._store:
                raise RecordExistsError(record.id)
            record.created_at = self._clock()
            self._store[record.id] = record.copy()
            return record

    def get_crawl_by_id(self, crawl_id: str) -> CrawlMetadata:
        with self._lock:
            rec = self._store.get(crawl_id)
            if rec is None:
                raise RecordNotFoundError(crawl_id)
            return rec.copy()

    def get_crawl_history(self) -> List[CrawlMetadata]:
        with self._lock:
            return [rec.copy() for rec in self._store.values()]

    def get_crawls_by_host(self, host: str) -> List[CrawlMetadata]:
        """Return crawls of `host`, oldest first."""
        with self._lock:
            crawls = [rec.copy() for rec in self._store.values() if rec.host == host]
        crawls.sort(key=lambda r: r.created_at)
        return crawls

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


def new_store() -> Dict[str, CrawlMetadata]:
    return {}
