from dataclasses import dataclass


@dataclass(frozen=True, eq=False)
class CrawlError:
    """A failure encountered for one URL during a crawl.

    `cause` is the underlying exception (an `HttpFetchError`, a
    `ResolutionError`, or an unexpected worker failure). Several errors may
    reference the same URL; identity equality keeps them distinct.
    """
    url: str
    cause: Exception

    def __str__(self) -> str:
        return str(self.cause)
