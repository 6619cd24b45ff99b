from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CrawlConfig:
    """Settings for one crawl instance.

    `total_workers` sizes the concurrency governor. `http_service` is any
    object with `fetch(url) -> HttpResponse`; the crawl instance refuses to
    start without one.
    """

    total_workers: int
    http_service: Optional[Any] = None


def new_default_config() -> CrawlConfig:
    """Return a config with the default worker budget and a default HTTP service."""
    # Deferred so domain objects do not pull in the HTTP stack on import.
    import requests

    from sitecrawl import config as env
    from sitecrawl.services.http_service import HttpService

    return CrawlConfig(
        total_workers=env.DEFAULT_TOTAL_WORKERS,
        http_service=HttpService(
            user_agent=env.DEFAULT_USER_AGENT,
            http_client=requests.get,
            timeout=env.DEFAULT_HTTP_TIMEOUT,
        ),
    )
