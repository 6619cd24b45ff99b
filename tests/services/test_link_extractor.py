from sitecrawl.services.link_extractor import LinkExtractor


def _hrefs(html, chunked=False):
    data = html.encode("utf-8")
    body = [data[i:i + 7] for i in range(0, len(data), 7)] if chunked else [data]
    return list(LinkExtractor().extract_hrefs(body))


def test_extract_hrefs_in_document_order():
    html = '<html><body><a href="/foo">Foo</a><p><a href="http://bar.com">Bar</a></p><a href="mailto:me@x">m</a></body></html>'
    assert _hrefs(html) == ["/foo", "http://bar.com", "mailto:me@x"]


def test_chunked_body_is_reassembled():
    html = '<a href="/one">1</a><a href="/two">2</a>'
    assert _hrefs(html, chunked=True) == ["/one", "/two"]


def test_self_closing_anchor_and_raw_values():
    html = '<a href="page.html#top"/><a href=" /spaced ">x</a>'
    assert _hrefs(html) == ["page.html#top", " /spaced "]


def test_anchor_without_href_and_other_tags_ignored():
    html = '<a name="x">no href</a><link href="/style.css"><area href="/map"><a href="">empty</a>'
    assert _hrefs(html) == [""]


def test_every_duplicate_href_is_yielded():
    html = '<a href="/first" href="/second">dup</a>'
    assert _hrefs(html) == ["/first", "/second"]


def test_malformed_trailing_html_is_not_an_error():
    html = '<a href="/ok">ok</a><div><a href="/late'
    hrefs = _hrefs(html)
    assert hrefs == ["/ok"]


def test_empty_body():
    assert _hrefs("") == []
