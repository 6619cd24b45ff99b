from typing import Callable, Iterable, Iterator, Optional

from bs4 import BeautifulSoup, SoupStrainer

ANCHOR_TAG = "a"
HREF_ATTR = "href"


def _keep_every_href(attrs: dict, key: str, value: str) -> None:
    # html.parser keeps only the last duplicate by default; collect every href.
    if key != HREF_ATTR:
        attrs[key] = value
        return
    existing = attrs[key]
    if isinstance(existing, list):
        existing.append(value)
    else:
        attrs[key] = [existing, value]


def _default_soup_factory(markup: bytes) -> BeautifulSoup:
    return BeautifulSoup(
        markup,
        "html.parser",
        parse_only=SoupStrainer(ANCHOR_TAG),
        on_duplicate_attribute=_keep_every_href,
    )


class LinkExtractor:
    """Pull raw anchor href values out of an HTML body, in document order."""

    def __init__(self, soup_factory: Optional[Callable[[bytes], BeautifulSoup]] = None):
        self._soup_factory = soup_factory or _default_soup_factory

    def extract_hrefs(self, body: Iterable[bytes]) -> Iterator[str]:
        """Yield every href of every <a> start or self-closing tag in `body`.

        Values are yielded unresolved and unfiltered. Malformed trailing markup
        simply ends the sequence early.

        The whole body is read and parsed before the first href is yielded,
        since BeautifulSoup has no incremental parse; stopping early saves no
        reads.
        """
        soup = self._soup_factory(b"".join(body))
        for anchor in soup.find_all(ANCHOR_TAG):
            for href in anchor.get_attribute_list(HREF_ATTR):
                if href is not None:
                    yield href
