from .crawls import CrawlsRepository

__all__ = ["CrawlsRepository"]
