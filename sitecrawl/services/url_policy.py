"""URL policy helpers: hostname extraction, reference resolution, scope checks.

All functions are pure; they are shared freely between crawl workers.
"""
import re
from urllib.parse import SplitResult, urldefrag, urljoin, urlsplit

from sitecrawl.exceptions import InvalidHostError, ResolutionError

HTTP_SCHEMES = frozenset(("http", "https"))

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _split(raw: str) -> SplitResult:
    """Split `raw` into URL components, raising ValueError for malformed input."""
    if _CONTROL_CHARS.search(raw):
        raise ValueError("invalid control character in URL")
    if _BAD_ESCAPE.search(re.split(r"[?#]", raw, maxsplit=1)[0]):
        raise ValueError("invalid URL escape")
    parts = urlsplit(raw)
    if not parts.scheme:
        first_segment = re.split(r"[/?#]", raw, maxsplit=1)[0]
        if first_segment.startswith(":"):
            raise ValueError("missing protocol scheme")
        if ":" in first_segment:
            raise ValueError("first path segment in URL cannot contain colon")
    # Accessing the port validates it; urllib only raises lazily.
    parts.port
    return parts


def is_absolute(url: str) -> bool:
    try:
        return bool(_split(url).scheme)
    except ValueError:
        return False


def hostname(url: str) -> str:
    """Return the lower-cased hostname of `url` or raise InvalidHostError."""
    try:
        host = _split(url).hostname
    except ValueError as e:
        raise InvalidHostError(url) from e
    if not host:
        raise InvalidHostError(url)
    return host


def is_http_scheme(url: str) -> bool:
    try:
        return _split(url).scheme.lower() in HTTP_SCHEMES
    except ValueError:
        return False


def resolve(candidate: str, base_url: str) -> str:
    """Resolve `candidate` against `base_url`.

    Absolute candidates are returned unchanged; relative references follow
    RFC 3986 resolution.
    """
    try:
        parts = _split(candidate)
    except ValueError as e:
        raise ResolutionError(candidate, base_url, str(e)) from e
    if parts.scheme:
        return candidate

    try:
        _split(base_url)
    except ValueError as e:
        raise ResolutionError(candidate, base_url, f"invalid base: {e}") from e
    return urljoin(base_url, candidate)


def same_domain(candidate: str, base_url: str) -> bool:
    """Return True when `candidate` stays on the host of `base_url`.

    Relative references are assumed to come from the page that contained them
    and are treated as in scope until resolved. Malformed candidates are also
    let through so that resolve() reports them.
    """
    try:
        parts = _split(candidate)
    except ValueError:
        return True
    if not parts.scheme:
        return True

    try:
        domain = hostname(base_url)
    except InvalidHostError:
        return False
    return parts.hostname == domain


def strip_fragment(url: str) -> str:
    return urldefrag(url).url
