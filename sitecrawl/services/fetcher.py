from __future__ import annotations

import logging
from typing import Iterator, Optional, Protocol

from sitecrawl.domain.http_response import HttpResponse

logger = logging.getLogger(__name__)

HTML_MEDIA_TYPES = frozenset(("text/html", "application/xhtml+xml"))


class Fetcher(Protocol):
    """Fetch a URL and return a streamed HTTP-like response.

    This is intentionally small so the transport can be swapped, for example
    with an in-memory fixture site in tests.
    """

    def fetch(self, url: str) -> HttpResponse: ...


def is_html(content_type: Optional[str]) -> bool:
    """True for HTML media types; a missing Content-Type is treated as HTML."""
    if not content_type:
        return True
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in HTML_MEDIA_TYPES


class PageLinkFetcher:
    """Fetch one page and yield the raw hrefs found in it.

    Bodies declared as something other than HTML are released unread. The
    response is released when iteration ends for any reason, including the
    caller abandoning the generator early.
    """

    def __init__(self, http_service: Fetcher, link_extractor):
        self._http_service = http_service
        self._link_extractor = link_extractor

    def fetch_links(self, url: str) -> Iterator[str]:
        # Raises HttpFetchError before anything is yielded when the GET fails.
        response = self._http_service.fetch(url)
        with response:
            if not is_html(response.content_type):
                logger.debug("Skipping (not html) %s: %s", url, response.content_type)
                return
            yield from self._link_extractor.extract_hrefs(response.body)
