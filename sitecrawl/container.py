"""Dependency injection container for the application."""
from datetime import timedelta

from dependency_injector import containers, providers
import requests

from sitecrawl import config as env
from sitecrawl.domain.config import CrawlConfig
from sitecrawl.repository.crawls import CrawlsRepository, new_store
from sitecrawl.services.crawl_instance import CrawlInstance
from sitecrawl.services.crawler_service import CrawlerService
from sitecrawl.services.http_service import HttpService
from sitecrawl.services.link_extractor import LinkExtractor


# Environment variables used by the container (read via `sitecrawl.config` helpers).
#
# USER_AGENT (str, default: "SiteCrawl/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (int seconds, default: 60)
#   Per-request timeout. There is no crawl-wide timeout.
#
# SITECRAWL_TOTAL_WORKERS (int, default: 650)
#   Worker budget: the most pages fetched at the same time within one crawl.
#
# SITECRAWL_CACHE_TTL_HOURS (int hours, default: 24)
#   How long a finished crawl of a host is served from the cache instead of
#   crawling the host again.
#
# SITECRAWL_REPORT_PATH (str, default: "report.json")
#   Where the CLI writes its JSON report.
#
# LOG_LEVEL (str, default: "INFO")
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", env.DEFAULT_USER_AGENT),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", env.DEFAULT_HTTP_TIMEOUT),
    "SITECRAWL_TOTAL_WORKERS": env.get_int_env("SITECRAWL_TOTAL_WORKERS", env.DEFAULT_TOTAL_WORKERS),
    "SITECRAWL_CACHE_TTL_HOURS": env.get_int_env("SITECRAWL_CACHE_TTL_HOURS", env.DEFAULT_CACHE_TTL_HOURS),
    "SITECRAWL_REPORT_PATH": env.get_str_env("SITECRAWL_REPORT_PATH", env.DEFAULT_REPORT_PATH),
    "LOG_LEVEL": env.log_level(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the SiteCrawl application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # In-memory datastore - Singleton so every repository shares the cache
    crawl_store = providers.Singleton(new_store)

    crawls_repository = providers.Singleton(
        CrawlsRepository,
        store=crawl_store,
    )

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    crawl_config = providers.Factory(
        CrawlConfig,
        total_workers=config.SITECRAWL_TOTAL_WORKERS.as_(int),
        http_service=http_service,
    )

    # One fresh instance per crawl; called with the seed URL
    crawl_instance = providers.Factory(
        CrawlInstance,
        config=crawl_config,
        link_extractor=link_extractor,
    )

    crawler_service = providers.Singleton(
        CrawlerService,
        crawls_repo=crawls_repository,
        instance_factory=crawl_instance.provider,
        freshness_window=providers.Callable(
            lambda hours: timedelta(hours=hours),
            config.SITECRAWL_CACHE_TTL_HOURS.as_(int),
        ),
    )
