"""Crawl result data model."""
from typing import List, NamedTuple

from sitecrawl.domain.crawl_error import CrawlError


class CrawlResult(NamedTuple):
    """Result of a completed crawl run.

    Both collections are unordered; callers must not rely on discovery order.
    """
    links: List[str]
    """Every absolute URL admitted to the frontier, the seed included"""

    errors: List[CrawlError]
    """Per-link failures recorded while crawling"""
