"""Crawl runs over a retailer's starting URLs.

The runner sits above the crawl core: it resolves retailers, builds a fresh
Crawler for every starting URL and decides what to do when a run fails.
The start page is the only thing ever retried.
"""

from dataclasses import asdict, dataclass
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

import structlog

from retailcrawl.config import Settings, settings as default_settings
from retailcrawl.core.exceptions import CrawlError, FetchError, StartPageUnavailable
from retailcrawl.crawler.base import Record
from retailcrawl.crawler.factory import ExtractorRegistry
from retailcrawl.crawler.http_client import HttpFetcher
from retailcrawl.crawler.orchestrator import Crawler
from retailcrawl.crawler.retailers.profile import RetailerProfile
from retailcrawl.crawler.utils.rate_limiter import RequestThrottle
from retailcrawl.crawler.utils.retry import crawl_retry


logger = structlog.get_logger(__name__)


@dataclass
class RunSummary:
    """Outcome of crawling one starting URL."""

    retailer: str
    start_url: str
    pages_fetched: int = 0
    records_emitted: int = 0
    duplicates_skipped: int = 0
    blocked_pages: int = 0
    fetch_errors: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CrawlRunner:
    """Runs crawls for registered retailers.

    Each starting URL gets its own Crawler, so visited URLs and listing
    dedup keys are never shared between runs. All crawlers share one
    request throttle, which keeps the per-domain delay across runs.
    """

    def __init__(
        self,
        registry: ExtractorRegistry,
        fetcher: HttpFetcher,
        max_pages: Optional[int] = None,
        request_delay_ms: Optional[int] = None,
        attempts: Optional[int] = None,
        retry_min_wait: float = 2,
        retry_max_wait: float = 60,
        config: Settings = default_settings,
    ):
        """Initialize the runner.

        Args:
            registry: Registry holding the retailer profiles
            fetcher: HTTP fetch adapter shared by all runs
            max_pages: Page cap for every run (defaults to per-retailer settings)
            request_delay_ms: Delay between fetches (defaults to per-retailer settings)
            attempts: Attempts at fetching a start page (defaults to CRAWL_RUN_ATTEMPTS)
            retry_min_wait: Minimum backoff between start-page attempts, in seconds
            retry_max_wait: Maximum backoff between start-page attempts, in seconds
            config: Settings used for the defaults above
        """
        self.registry = registry
        self.fetcher = fetcher
        self.max_pages = max_pages
        self.request_delay_ms = request_delay_ms
        self.config = config
        self.attempts = config.CRAWL_RUN_ATTEMPTS if attempts is None else attempts
        self._retry = crawl_retry(self.attempts, retry_min_wait, retry_max_wait)
        self.throttle = RequestThrottle()
        self.summaries: List[RunSummary] = []

    def create_crawler(self, profile: RetailerProfile) -> Crawler:
        return Crawler(
            profile.slug,
            self.registry.create_extractors(profile.slug),
            self.fetcher,
            max_pages=self.max_pages,
            request_delay_ms=self.request_delay_ms,
            throttle=self.throttle,
            headers=profile.headers,
            block_markers=profile.block_markers,
            config=self.config,
        )

    async def run_retailer(
        self, slug: str, start_urls: Optional[Sequence[str]] = None
    ) -> AsyncIterator[Record]:
        """Crawl a retailer's starting URLs one after another.

        A starting URL that fails is logged and recorded in its summary; the
        run continues with the next one.

        Args:
            slug: Retailer slug
            start_urls: URLs to crawl (defaults to the profile's starting URLs)

        Raises:
            RetailerNotFoundError: If the retailer is not registered
            CrawlError: If there is nothing to crawl
        """
        profile = self.registry.get_retailer(slug)
        urls = list(start_urls) if start_urls else list(profile.starting_urls)
        if not urls:
            raise CrawlError(slug, "no starting URLs configured")

        logger.info("retailer_run_started", retailer=slug, start_urls=len(urls))
        for url in urls:
            try:
                async for record in self._crawl_start_url(profile, url):
                    yield record
            except (CrawlError, FetchError) as e:
                logger.error("start_url_failed", retailer=slug, url=url, error=e.message)

        failed = sum(1 for s in self.summaries if s.retailer == slug and not s.succeeded)
        logger.info("retailer_run_finished", retailer=slug, start_urls=len(urls), failed=failed)

    async def run_url(self, url: str) -> AsyncIterator[Record]:
        """Crawl a single URL for whichever retailer serves it.

        Raises:
            RetailerNotFoundError: If no registered retailer handles the URL
            StartPageUnavailable: If the first page could not be fetched
        """
        profile = self.registry.find_retailer(url)
        async for record in self._crawl_start_url(profile, url):
            yield record

    async def _crawl_start_url(self, profile: RetailerProfile, url: str) -> AsyncIterator[Record]:
        crawler = self.create_crawler(profile)
        summary = RunSummary(retailer=profile.slug, start_url=url)
        self.summaries.append(summary)

        try:
            html = await self._retry(self._fetch_start_page)(crawler, url)
            async for record in crawler.crawl_with_pagination(url, start_html=html):
                yield record
        except StartPageUnavailable as e:
            summary.error = e.message
            raise
        finally:
            summary.pages_fetched = crawler.stats.pages_fetched
            summary.records_emitted = crawler.stats.records_emitted
            summary.duplicates_skipped = crawler.stats.duplicates_skipped
            summary.blocked_pages = crawler.stats.blocked_pages
            summary.fetch_errors = crawler.stats.fetch_errors

    async def _fetch_start_page(self, crawler: Crawler, url: str) -> str:
        try:
            return await crawler.fetch_page(url)
        except FetchError as e:
            crawler.stats.fetch_errors += 1
            logger.warning(
                "start_page_fetch_failed",
                retailer=crawler.retailer_slug,
                url=url,
                status_code=e.status_code,
                error=e.message,
            )
            raise StartPageUnavailable(crawler.retailer_slug, url) from e
