"""Custom exceptions for SiteCrawl."""


class ConfigError(Exception):
    """Raised when a crawl instance is built with an invalid or missing config."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"crawler has invalid or missing config: {reason}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors or an error status."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class ResolutionError(Exception):
    """Raised when a link reference cannot be resolved into an absolute URL."""

    def __init__(self, reference: str, base_url: str, reason: str):
        self.reference = reference
        self.base_url = base_url
        self.reason = reason
        super().__init__(f"error getting abs url: {reference!r} baseURL: {base_url!r}: {reason}")


class InvalidHostError(Exception):
    """Raised when a URL has no parseable http(s) hostname."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"hostname is invalid for {url!r}, must be of http or https scheme")


class NoDatastoreError(Exception):
    """Raised when a repository is built without a backing store."""

    def __init__(self):
        super().__init__("no datastore provided")


class RecordExistsError(Exception):
    """Raised when saving a crawl record whose id is already stored."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"crawl record '{record_id}' already exists")


class RecordNotFoundError(Exception):
    """Raised when a requested crawl record cannot be found."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"crawl record '{record_id}' not found")
