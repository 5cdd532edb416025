"""Pagination and dedup orchestration for one crawl run.

A Crawler owns the visited-URL set, the seen listing keys and the run
statistics. It fetches pages one at a time, runs the extractors that
handle each page and follows pagination tokens until the chain ends or the
page cap is reached. Create a new Crawler for every run.
"""

from dataclasses import asdict, dataclass
from typing import AsyncIterator, Dict, Iterator, List, Mapping, Optional, Sequence, Set

import structlog

from retailcrawl.config import Settings, settings as default_settings
from retailcrawl.core.exceptions import FetchError
from retailcrawl.crawler.base import Extractor, ListingUrlRecord, PaginationToken, Record
from retailcrawl.crawler.extractors.blocking import is_blocked_page
from retailcrawl.crawler.http_client import FetchOptions, HttpFetcher
from retailcrawl.crawler.utils.normalizer import canonicalize_url
from retailcrawl.crawler.utils.rate_limiter import RequestThrottle


logger = structlog.get_logger(__name__)


@dataclass
class CrawlStats:
    """Counters for one crawl run."""

    pages_fetched: int = 0
    records_emitted: int = 0
    duplicates_skipped: int = 0
    blocked_pages: int = 0
    fetch_errors: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class Crawler:
    """Walks a paginated listing for one retailer.

    Example:
        crawler = Crawler("tesco", registry.create_extractors("tesco"), fetcher)
        async for record in crawler.crawl_with_pagination(start_url):
            store(record)
    """

    def __init__(
        self,
        retailer_slug: str,
        extractors: Sequence[Extractor],
        fetcher: HttpFetcher,
        max_pages: Optional[int] = None,
        request_delay_ms: Optional[int] = None,
        throttle: Optional[RequestThrottle] = None,
        headers: Optional[Mapping[str, str]] = None,
        block_markers: Sequence[str] = (),
        config: Settings = default_settings,
    ):
        """Initialize the crawler.

        Args:
            retailer_slug: Retailer being crawled
            extractors: Extractors in registration order
            fetcher: HTTP fetch adapter
            max_pages: Page cap (defaults to the retailer's configured cap)
            request_delay_ms: Delay between page fetches (defaults to the
                retailer's configured delay)
            throttle: Request throttle (a fresh one by default)
            headers: Extra request headers sent with every fetch
            block_markers: Retailer-specific blocked-page markers
            config: Settings used for the defaults above
        """
        if max_pages is not None and max_pages < 1:
            raise ValueError("max_pages must be at least 1")

        self.retailer_slug = retailer_slug
        self.extractors: List[Extractor] = list(extractors)
        self.fetcher = fetcher
        self.config = config
        self._max_pages = max_pages
        self._request_delay_ms = request_delay_ms
        self.throttle = throttle or RequestThrottle()
        self.headers = dict(headers or {})
        self.block_markers = tuple(block_markers)

        self.stats = CrawlStats()
        self._crawled_urls: Set[str] = set()
        self._seen_keys: Set[str] = set()
        self.logger = logger.bind(retailer=retailer_slug)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_max_pages(self) -> int:
        if self._max_pages is not None:
            return self._max_pages
        return self.config.get_max_pages(self.retailer_slug)

    def get_request_delay_ms(self) -> int:
        if self._request_delay_ms is not None:
            return self._request_delay_ms
        return self.config.get_request_delay_ms(self.retailer_slug)

    # ------------------------------------------------------------------
    # Visited URLs
    # ------------------------------------------------------------------

    def mark_as_crawled(self, url: str) -> None:
        self._crawled_urls.add(canonicalize_url(url))

    def has_been_crawled(self, url: str) -> bool:
        return canonicalize_url(url) in self._crawled_urls

    def reset_crawled_urls(self) -> None:
        """Forget visited URLs and seen listing keys."""
        self._crawled_urls.clear()
        self._seen_keys.clear()

    def get_crawled_url_count(self) -> int:
        return len(self._crawled_urls)

    # ------------------------------------------------------------------
    # Crawling
    # ------------------------------------------------------------------

    def select_extractors(self, url: str) -> List[Extractor]:
        """First extractor per record kind whose can_handle accepts the URL."""
        selected: Dict[str, Extractor] = {}
        for extractor in self.extractors:
            if extractor.record_kind not in selected and extractor.can_handle(url):
                selected[extractor.record_kind] = extractor
        return list(selected.values())

    async def fetch_page(self, url: str) -> str:
        """Fetch one page, respecting the request delay.

        Raises:
            FetchError: If the page could not be fetched
        """
        await self.throttle.wait(url, self.get_request_delay_ms())
        response = await self.fetcher.fetch(url, FetchOptions(headers=dict(self.headers)))
        self.stats.pages_fetched += 1
        return response.body

    def extract_page(self, html: str, url: str) -> Iterator[Record]:
        """Run the matching extractors over an already fetched page."""
        extractors = self.select_extractors(url)
        if not extractors:
            self.logger.warning("no_extractor_for_url", url=url)
            return

        if is_blocked_page(html, extra_markers=self.block_markers):
            self.stats.blocked_pages += 1

        for extractor in extractors:
            yield from extractor.extract(html, url)

    async def crawl(self, url: str) -> AsyncIterator[Record]:
        """Fetch a single page and yield every record, pagination tokens included.

        Raises:
            FetchError: If the page could not be fetched
        """
        html = await self.fetch_page(url)
        self.mark_as_crawled(url)
        for record in self.extract_page(html, url):
            yield record

    async def crawl_with_pagination(
        self,
        start_url: str,
        max_pages: Optional[int] = None,
        start_html: Optional[str] = None,
    ) -> AsyncIterator[Record]:
        """Crawl a listing and its following pages.

        Listing records are forwarded once per dedup key; details and review
        records are forwarded unchanged. Pagination tokens are consumed here
        and never yielded. A fetch failure ends the chain; records already
        yielded stand.

        Args:
            start_url: First page of the chain
            max_pages: Hard cap on pages for this call (defaults to get_max_pages())
            start_html: Already fetched HTML of start_url, used instead of
                fetching it again

        Yields:
            ListingUrlRecord, ProductDetailsRecord and ReviewRecord instances
        """
        limit = max_pages if max_pages is not None else self.get_max_pages()
        if limit < 1:
            raise ValueError("max_pages must be at least 1")

        url: Optional[str] = start_url
        html = start_html
        pages = 0

        self.logger.info("crawl_started", start_url=start_url, max_pages=limit)
        try:
            while url is not None and pages < limit:
                if html is None:
                    try:
                        html = await self.fetch_page(url)
                    except FetchError as e:
                        self.stats.fetch_errors += 1
                        self.logger.error(
                            "page_fetch_failed",
                            url=url,
                            page=pages + 1,
                            status_code=e.status_code,
                            error=e.message,
                        )
                        break

                pages += 1
                self.mark_as_crawled(url)

                next_url = None
                for record in self.extract_page(html, url):
                    if isinstance(record, PaginationToken):
                        if next_url is None and not self.has_been_crawled(record.url):
                            next_url = record.url
                        continue

                    if isinstance(record, ListingUrlRecord):
                        if record.dedup_key in self._seen_keys:
                            self.stats.duplicates_skipped += 1
                            self.logger.debug("duplicate_url_skipped", url=record.url)
                            continue
                        self._seen_keys.add(record.dedup_key)

                    self.stats.records_emitted += 1
                    yield record

                url, html = next_url, None
        finally:
            self.logger.info(
                "crawl_finished",
                start_url=start_url,
                pages=pages,
                **self.stats.to_dict(),
            )
