"""Domain objects for SiteCrawl - explicit re-exports to satisfy linters."""
from .config import CrawlConfig as CrawlConfig
from .crawl_error import CrawlError as CrawlError
from .crawl_result import CrawlResult as CrawlResult
from .error_collector import ErrorCollector as ErrorCollector
from .frontier import Frontier as Frontier
from .http_response import HttpResponse as HttpResponse
from .metadata import CrawlMetadata as CrawlMetadata

__all__ = [
    "CrawlConfig",
    "CrawlError",
    "CrawlResult",
    "ErrorCollector",
    "Frontier",
    "HttpResponse",
    "CrawlMetadata",
]
