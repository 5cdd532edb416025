"""Product URL discovery on listing (category/search) pages."""

import re
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from bs4 import BeautifulSoup

from retailcrawl.crawler.base import (
    Extractor,
    ListingUrlRecord,
    PaginationToken,
    RECORD_KIND_LISTING,
    Record,
    SOURCE_DOM,
    SOURCE_STRUCTURED_DATA,
    utc_now_iso,
)
from retailcrawl.crawler.extractors.blocking import is_blocked_page
from retailcrawl.crawler.extractors.pagination import find_next_page_url, next_page_number
from retailcrawl.crawler.extractors.selectors import first_attr, parse_html, select_union
from retailcrawl.crawler.extractors.structured_data import StructuredDataReader
from retailcrawl.crawler.retailers.profile import RetailerProfile
from retailcrawl.crawler.utils.category import category_from_url
from retailcrawl.crawler.utils.normalizer import absolutize_url, canonicalize_url


class ListingUrlExtractor(Extractor):
    """Finds product links on a retailer's listing pages.

    Links come from the DOM (the union of the profile's link selectors),
    supplemented by inline-JSON URL patterns. A JSON-LD ItemList is used only
    when neither yields a product URL. Every candidate is canonicalized and
    checked against the retailer's product-URL predicate, then de-duplicated
    per page by natural key or canonical URL. A PaginationToken, if any, is
    always the last record.
    """

    record_kind = RECORD_KIND_LISTING

    def __init__(self, profile: RetailerProfile):
        """Initialize the extractor.

        Args:
            profile: Retailer profile supplying selectors and URL rules
        """
        self.profile = profile
        self.retailer_id = profile.slug
        super().__init__()

    def can_handle(self, url: str) -> bool:
        return self.profile.is_listing_url(url)

    def extract(self, html: str, url: str) -> Iterator[Record]:
        soup = parse_html(html)
        if is_blocked_page(html, soup, self.profile.block_markers):
            self.logger.warning("blocked_page_detected", url=url)
            return

        category = category_from_url(url, self.profile.category_rules)
        discovered_at = utc_now_iso()
        seen: Set[str] = set()

        count = 0
        for record in self._records(self._page_links(soup, html, url), url, category, discovered_at, seen):
            count += 1
            yield record

        if count == 0:
            item_list = StructuredDataReader(soup).item_list_urls()
            candidates = [(u, SOURCE_STRUCTURED_DATA) for u in self._absolutize(item_list, url)]
            for record in self._records(candidates, url, category, discovered_at, seen):
                count += 1
                yield record

        self.logger.info("listing_urls_extracted", url=url, count=count, category=category)

        if self.profile.listing.supports_pagination:
            token = self._pagination_token(soup, url, category)
            if token is not None:
                yield token

    def _page_links(self, soup: BeautifulSoup, html: str, url: str) -> List[Tuple[str, str]]:
        """Candidate links from the DOM, then from inline JSON in the raw HTML."""
        rules = self.profile.listing
        hrefs = []
        for element in select_union(soup, rules.link_selectors, "product_links"):
            href = first_attr(element, rules.link_attrs)
            if href:
                hrefs.append(href)

        for pattern in rules.inline_url_patterns:
            for match in re.finditer(pattern, html):
                hrefs.append(match.group(1).replace("\\/", "/"))

        if rules.inline_id_url_template:
            for pattern in rules.inline_id_patterns:
                for match in re.finditer(pattern, html):
                    hrefs.append(rules.inline_id_url_template.format(id=match.group(1)))

        return [(u, SOURCE_DOM) for u in self._absolutize(hrefs, url)]

    @staticmethod
    def _absolutize(hrefs: Iterable[str], base_url: str) -> Iterator[str]:
        for href in hrefs:
            absolute = absolutize_url(href, base_url)
            if absolute:
                yield absolute

    def _records(
        self,
        candidates: Iterable[Tuple[str, str]],
        page_url: str,
        category: Optional[str],
        discovered_at: str,
        seen: Set[str],
    ) -> Iterator[ListingUrlRecord]:
        for candidate, source in candidates:
            product_url = self.profile.canonical_product_url(candidate)
            if not self.profile.is_product_url(product_url):
                continue

            natural_key = self.profile.natural_key(product_url)
            key = natural_key or product_url
            if key in seen:
                self.logger.debug("duplicate_url_skipped", url=product_url)
                continue
            seen.add(key)

            metadata = {
                "source": source,
                "source_url": page_url,
                "retailer": self.retailer_id,
                "extracted_at": discovered_at,
                "discovered_from": page_url,
                "discovered_at": discovered_at,
            }
            if natural_key:
                metadata["natural_key"] = natural_key

            yield ListingUrlRecord(
                url=product_url,
                retailer_id=self.retailer_id,
                category=category,
                metadata=metadata,
            )

    def _pagination_token(
        self, soup: BeautifulSoup, url: str, category: Optional[str]
    ) -> Optional[PaginationToken]:
        rules = self.profile.listing
        next_url = find_next_page_url(soup, url, rules.next_page_selectors, rules.page_number_selectors)
        if not next_url or not self.profile.handles_host(next_url):
            return None
        if canonicalize_url(next_url) == canonicalize_url(url):
            return None

        return PaginationToken(
            url=next_url,
            retailer_id=self.retailer_id,
            page_number=next_page_number(next_url, url),
            category=category,
            discovered_from=url,
        )
