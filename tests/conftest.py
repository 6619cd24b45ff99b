import threading
import time

import pytest
import requests

from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import HttpFetchError


class FixtureSite:
    """In-memory website standing in for HttpService.

    `pages` maps absolute URL -> HTML string, or -> int for an error status.
    URLs missing from `pages` fail with a 404.
    """

    def __init__(self, pages, delay: float = 0.0):
        self.pages = dict(pages)
        self.delay = delay
        self._lock = threading.Lock()
        self.fetch_counts = {}
        self.closed = 0
        self.active = 0
        self.max_active = 0

    def _close(self):
        with self._lock:
            self.closed += 1
            self.active -= 1

    def fetch(self, url: str) -> HttpResponse:
        with self._lock:
            self.fetch_counts[url] = self.fetch_counts.get(url, 0) + 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        if self.delay:
            time.sleep(self.delay)
        page = self.pages.get(url, 404)
        if isinstance(page, int):
            self._close()
            raise HttpFetchError(url, requests.exceptions.HTTPError(f"{page} Error for url: {url}"))
        return HttpResponse(200, [page.encode("utf-8")], "text/html", self._close)


@pytest.fixture
def fixture_site():
    return FixtureSite
