import requests
from typing import Callable, Iterator

from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import HttpFetchError

CHUNK_SIZE = 64 * 1024


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection (DIP compliance).
    This enables easy testing without patching and allows swapping HTTP libraries.
    Responses are streamed: the caller owns the returned HttpResponse and must
    close it (it is a context manager).
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 60):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """Issue one GET for `url`; raise HttpFetchError on transport failure or error status."""
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        try:
            resp.raise_for_status()
        except requests.exceptions.RequestException as e:
            resp.close()
            raise HttpFetchError(url, e) from e

        # Extract Content-Type if response has headers; real exceptions bubble up
        # once the connection is released.
        ct = None
        try:
            if hasattr(resp, "headers"):
                ct = resp.headers.get("Content-Type")
        except Exception:
            resp.close()
            raise

        return HttpResponse(resp.status_code, _iter_body(resp, url), ct, resp.close)


def _iter_body(resp, url: str) -> Iterator[bytes]:
    # Read failures mid-body are reported the same way as transport failures.
    try:
        yield from resp.iter_content(chunk_size=CHUNK_SIZE)
    except requests.exceptions.RequestException as e:
        raise HttpFetchError(url, e) from e
