from unittest.mock import MagicMock

import pytest

from sitecrawl.domain.config import CrawlConfig, new_default_config
from sitecrawl.exceptions import ConfigError, HttpFetchError, InvalidHostError, ResolutionError
from sitecrawl.services.completion_tracker import CrawlState
from sitecrawl.services.crawl_instance import CrawlInstance
from sitecrawl.services.http_service import HttpService


def _crawl(site, seed, workers=4):
    instance = CrawlInstance(seed, CrawlConfig(total_workers=workers, http_service=site))
    result = instance.run()
    return instance, result


@pytest.mark.parametrize("workers", [0, -1, None, 1.5, True])
def test_invalid_worker_budget_is_config_error(workers):
    with pytest.raises(ConfigError):
        CrawlInstance("https://example.test/", CrawlConfig(total_workers=workers, http_service=MagicMock()))


def test_missing_http_client_is_config_error():
    with pytest.raises(ConfigError):
        CrawlInstance("https://example.test/", CrawlConfig(total_workers=4))


def test_missing_config_is_config_error():
    with pytest.raises(ConfigError):
        CrawlInstance("https://example.test/", None)


def test_default_config():
    cfg = new_default_config()
    assert cfg.total_workers == 650
    assert isinstance(cfg.http_service, HttpService)
    assert cfg.http_service.timeout == 60


def test_seed_without_host_fails_before_any_fetch():
    http_service = MagicMock()
    instance = CrawlInstance("ww.monzo.com", CrawlConfig(total_workers=2, http_service=http_service))
    with pytest.raises(InvalidHostError):
        instance.run()
    assert not http_service.fetch.called
    assert instance.links() == []


def test_relative_foreign_and_mailto_links(fixture_site):
    site = fixture_site({
        "https://example.test/a": '<a href="/b">b</a><a href="https://other.test/x">x</a><a href="mailto:me@x">m</a>',
        "https://example.test/b": "<p>no links</p>",
    })
    instance, result = _crawl(site, "https://example.test/a")

    assert sorted(result.links) == ["https://example.test/a", "https://example.test/b"]
    assert result.errors == []
    assert "https://other.test/x" not in site.fetch_counts
    assert instance.outstanding == 0
    assert instance.state == CrawlState.DONE


def test_seed_error_status_is_recorded_not_fatal(fixture_site):
    site = fixture_site({"https://example.test/": 500})
    instance, result = _crawl(site, "https://example.test/")

    assert result.links == ["https://example.test/"]
    assert len(result.errors) == 1
    err = result.errors[0]
    assert err.url == "https://example.test/"
    assert isinstance(err.cause, HttpFetchError)
    assert instance.outstanding == 0


def test_mutual_links_visited_exactly_once(fixture_site):
    site = fixture_site({
        "https://example.test/a": '<a href="/b">b</a>',
        "https://example.test/b": '<a href="/a">a</a><a href="https://example.test/b">self</a>',
    })
    instance, result = _crawl(site, "https://example.test/a")

    assert sorted(result.links) == ["https://example.test/a", "https://example.test/b"]
    assert site.fetch_counts == {"https://example.test/a": 1, "https://example.test/b": 1}
    assert instance.outstanding == 0


def test_fragments_and_scripts_are_not_crawl_targets(fixture_site):
    site = fixture_site({
        "https://example.test/": '<a href="#top">top</a><a href="javascript:void(0)">js</a>'
                                 '<a href="/page#section">p</a><a href="/page#other">p2</a>',
        "https://example.test/page": "",
    })
    _, result = _crawl(site, "https://example.test/")

    assert sorted(result.links) == ["https://example.test/", "https://example.test/page"]
    assert site.fetch_counts["https://example.test/page"] == 1


def test_unresolvable_reference_is_recorded_and_skipped(fixture_site):
    site = fixture_site({"https://example.test/": '<a href=":xyz">bad</a><a href="/ok">ok</a>',
                         "https://example.test/ok": ""})
    _, result = _crawl(site, "https://example.test/")

    assert sorted(result.links) == ["https://example.test/", "https://example.test/ok"]
    assert len(result.errors) == 1
    assert result.errors[0].url == ":xyz"
    assert isinstance(result.errors[0].cause, ResolutionError)


def test_broken_links_do_not_stop_the_crawl(fixture_site):
    site = fixture_site({
        "https://example.test/": '<a href="/missing">m</a><a href="/down">d</a><a href="/fine">f</a>',
        "https://example.test/down": 503,
        "https://example.test/fine": '<a href="/deeper">d</a>',
        "https://example.test/deeper": "",
    })
    _, result = _crawl(site, "https://example.test/")

    assert len(result.links) == 5
    assert sorted(e.url for e in result.errors) == ["https://example.test/down", "https://example.test/missing"]


def test_unexpected_worker_failure_is_recorded(fixture_site):
    site = fixture_site({"https://example.test/": '<a href="/b">b</a>'})
    site.fetch = MagicMock(side_effect=RuntimeError("transport bug"))
    instance, result = _crawl(site, "https://example.test/")

    assert result.links == ["https://example.test/"]
    assert len(result.errors) == 1
    assert isinstance(result.errors[0].cause, RuntimeError)
    assert instance.outstanding == 0


def test_large_closed_graph_terminates_with_bounded_concurrency(fixture_site):
    pages = {}
    total = 120
    for i in range(total):
        # each page links forward, backward, to the root and to a foreign host
        links = [f"/p{(i + 1) % total}", f"/p{(i * 7) % total}", "/p0", "https://elsewhere.test/"]
        pages[f"https://example.test/p{i}"] = "".join(f'<a href="{h}">x</a>' for h in links)
    site = fixture_site(pages, delay=0.002)

    instance, result = _crawl(site, "https://example.test/p0", workers=5)

    assert len(result.links) == total
    assert set(site.fetch_counts.values()) == {1}
    assert site.max_active <= 5
    assert site.closed == total
    assert result.errors == []
    assert instance.outstanding == 0


def test_single_worker_budget_still_completes(fixture_site):
    site = fixture_site({
        "https://example.test/": '<a href="/a">a</a><a href="/b">b</a>',
        "https://example.test/a": '<a href="/b">b</a>',
        "https://example.test/b": '<a href="/">root</a>',
    })
    _, result = _crawl(site, "https://example.test/", workers=1)
    assert len(result.links) == 3
    assert site.max_active == 1


def test_instance_runs_only_once(fixture_site):
    site = fixture_site({"https://example.test/": ""})
    instance, _ = _crawl(site, "https://example.test/")
    with pytest.raises(RuntimeError):
        instance.run()
