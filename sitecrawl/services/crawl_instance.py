import logging
import queue
import threading
from typing import List, Optional

from sitecrawl.domain.config import CrawlConfig
from sitecrawl.domain.crawl_error import CrawlError
from sitecrawl.domain.crawl_result import CrawlResult
from sitecrawl.domain.error_collector import ErrorCollector
from sitecrawl.domain.frontier import Frontier
from sitecrawl.exceptions import ConfigError, HttpFetchError, ResolutionError
from sitecrawl.services import url_policy
from sitecrawl.services.completion_tracker import CompletionTracker, CrawlState
from sitecrawl.services.fetcher import PageLinkFetcher
from sitecrawl.services.governor import WorkerGovernor
from sitecrawl.services.link_extractor import LinkExtractor

logger = logging.getLogger(__name__)

_SHUTDOWN = object()


class CrawlInstance:
    """One crawl of a single site, from a seed URL to a settled frontier.

    A dispatcher thread pops admitted URLs off an unbounded work queue and
    starts one worker thread per URL once the governor grants a slot. Workers
    fetch the page, filter its links through the URL policy and admit new ones
    back onto the queue. The run ends when the completion tracker's balance of
    admitted-but-unfinished URLs returns to zero.

    Instances are single-use: build a fresh one per crawl.
    """

    def __init__(self, initial_url: str, config: CrawlConfig, link_extractor: Optional[LinkExtractor] = None):
        if config is None:
            raise ConfigError("config is required")
        workers = config.total_workers
        if isinstance(workers, bool) or not isinstance(workers, int) or workers <= 0:
            raise ConfigError(f"total_workers must be a positive integer, got {workers!r}")
        if config.http_service is None:
            raise ConfigError("an HTTP client is required")

        self.initial_url = initial_url
        self.config = config
        self._fetcher = PageLinkFetcher(config.http_service, link_extractor or LinkExtractor())
        self._frontier = Frontier()
        self._errors = ErrorCollector()
        self._governor = WorkerGovernor(workers)
        self._tracker = CompletionTracker()
        self._queue: "queue.SimpleQueue[object]" = queue.SimpleQueue()
        self._started = False
        self._start_lock = threading.Lock()

    @property
    def outstanding(self) -> int:
        return self._tracker.outstanding

    @property
    def state(self) -> CrawlState:
        return self._tracker.state(self._queue.qsize())

    def run(self) -> CrawlResult:
        """Crawl until every admitted URL has been processed; block the caller meanwhile.

        Raises InvalidHostError before any work starts when the seed has no
        usable hostname.
        """
        with self._start_lock:
            if self._started:
                raise RuntimeError("crawl instance has already been run")
            self._started = True

        url_policy.hostname(self.initial_url)

        dispatcher = threading.Thread(target=self._dispatch, name="sitecrawl-dispatch", daemon=True)
        dispatcher.start()

        logger.info("Crawl started for %s with %s workers", self.initial_url, self._governor.capacity)
        self._begin_link_processing(url_policy.strip_fragment(self.initial_url))

        self._tracker.wait()
        dispatcher.join()

        result = CrawlResult(links=self.links(), errors=self.errors())
        logger.info(
            "Crawl finished for %s: %s link(s), %s error(s)",
            self.initial_url,
            len(result.links),
            len(result.errors),
        )
        return result

    def links(self) -> List[str]:
        return self._frontier.snapshot()

    def errors(self) -> List[CrawlError]:
        return self._errors.snapshot()

    def _dispatch(self) -> None:
        while True:
            item = self._queue.get()
            if item is _SHUTDOWN:
                return
            self._governor.acquire()
            try:
                worker = threading.Thread(target=self._crawl, args=(item,), daemon=True)
                worker.start()
            except Exception as e:
                logger.error("Could not start worker for %s: %s", item, e, exc_info=True)
                self._errors.record(CrawlError(item, e))
                self._end()

    def _end(self) -> None:
        self._governor.release()
        if self._tracker.finish():
            self._queue.put(_SHUTDOWN)

    def _crawl(self, url: str) -> None:
        try:
            for href in self._fetcher.fetch_links(url):
                self._validate_and_dispatch(href, url)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            self._errors.record(CrawlError(url, e))
        except Exception as e:
            logger.error("Unexpected error while crawling %s: %s", url, e, exc_info=True)
            self._errors.record(CrawlError(url, e))
        finally:
            self._end()

    def _validate_and_dispatch(self, href: str, base_url: str) -> None:
        link = href.strip()
        if not url_policy.same_domain(link, base_url):
            logger.debug("Skipping (external) %s on %s", link, base_url)
            return

        try:
            abs_url = url_policy.resolve(link, base_url)
        except ResolutionError as e:
            logger.debug("Skipping (unresolvable) %s on %s: %s", link, base_url, e)
            self._errors.record(CrawlError(link, e))
            return

        if not url_policy.is_http_scheme(abs_url):
            logger.debug("Skipping (scheme) %s", abs_url)
            return

        abs_url = url_policy.strip_fragment(abs_url)
        if url_policy.same_domain(abs_url, self.initial_url):
            self._begin_link_processing(abs_url)

    def _begin_link_processing(self, abs_url: str) -> None:
        if not self._frontier.try_admit(abs_url):
            logger.debug("Skipping (visited) %s", abs_url)
            return
        # Counted before queueing so the balance cannot touch zero while this
        # URL is still waiting for a worker.
        self._tracker.add()
        self._queue.put(abs_url)
