import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from sitecrawl.domain.metadata import CrawlMetadata
from sitecrawl.repository.crawls import CrawlsRepository
from sitecrawl.services import url_policy

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS_WINDOW = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CrawlerService:
    """Runs site crawls and caches their results per host.

    `instance_factory(initial_url)` must return a fresh, unstarted crawl
    instance. A crawl of a host that already has a result younger than
    `freshness_window` returns the cached record instead of crawling again.
    """

    def __init__(
        self,
        crawls_repo: CrawlsRepository,
        instance_factory: Callable,
        freshness_window: timedelta = DEFAULT_FRESHNESS_WINDOW,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.crawls_repo = crawls_repo
        self.instance_factory = instance_factory
        self.freshness_window = freshness_window
        self._clock = clock or _utcnow

    def crawl_site(self, initial_url: str) -> List[CrawlMetadata]:
        """Validate the URL, reuse a fresh cached crawl of its host, or run a new crawl.

        Raises InvalidHostError for a URL without a usable host and
        RecordExistsError if the new record id collides with a stored one.
        """
        host = url_policy.hostname(initial_url)
        logger.info("Valid host %s", host)

        cached = self._fresh_crawl_for(host)
        if cached is not None:
            logger.info("Previous results exist for host - %s", host)
            return [cached]

        record = CrawlMetadata(initial_url=initial_url, id=str(uuid.uuid4()), host=host)
        crawler = self.instance_factory(initial_url)

        logger.info("Beginning new web crawl of %s, this may take some time", initial_url)
        result = crawler.run()

        record.err_list = result.errors
        if result.errors:
            logger.warning("Detected %s error(s) while web crawling %s", len(result.errors), host)
        record.crawl_result_set = result.links

        logger.info("Crawl %s complete, caching results", record.id)
        self.crawls_repo.save(record)
        return [record]

    def get_crawl(self, crawl_id: str) -> List[CrawlMetadata]:
        """Return the stored crawl with `crawl_id`; raises RecordNotFoundError."""
        record = self.crawls_repo.get_crawl_by_id(crawl_id)
        logger.info("Crawl %s found", crawl_id)
        return [record]

    def get_crawl_history(self) -> List[CrawlMetadata]:
        return self.crawls_repo.get_crawl_history()

    def _fresh_crawl_for(self, host: str) -> Optional[CrawlMetadata]:
        end = self._clock()
        start = end - self.freshness_window
        for record in reversed(self.crawls_repo.get_crawls_by_host(host)):
            if record.created_at is not None and start <= record.created_at <= end:
                return record
        return None
