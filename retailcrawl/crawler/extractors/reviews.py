"""Customer review extraction: JSON-LD first, DOM review containers second."""

import hashlib
import re
from datetime import date
from typing import Any, Dict, Iterator, List, Optional

from bs4 import Tag

from retailcrawl.crawler.base import (
    Extractor,
    RECORD_KIND_REVIEWS,
    Record,
    ReviewRecord,
    SOURCE_DOM,
    SOURCE_STRUCTURED_DATA,
    utc_now_iso,
)
from retailcrawl.crawler.extractors.blocking import is_blocked_page
from retailcrawl.crawler.extractors.selectors import (
    element_text,
    first_attr,
    parse_html,
    select_all,
    select_first,
    select_text,
)
from retailcrawl.crawler.extractors.structured_data import StructuredDataReader, text_value
from retailcrawl.crawler.retailers.profile import RetailerProfile
from retailcrawl.crawler.utils.normalizer import (
    clean_text,
    parse_count,
    parse_rating,
    parse_review_date,
)


_STAR_CLASS_RE = re.compile(r"(?:star|rating)s?-(\d)(?:-(\d))?(?!\d)", re.IGNORECASE)
_VERIFIED_RE = re.compile(r"verified\s+(?:purchase|buyer|owner)", re.IGNORECASE)
_WIDTH_RE = re.compile(r"width:\s*(\d+(?:\.\d+)?)\s*%", re.IGNORECASE)


class ProductReviewsExtractor(Extractor):
    """Extracts reviews from a product page.

    JSON-LD Review nodes are preferred. When none of them produces a valid
    record the DOM review containers are read instead. Candidates without a
    rating in (0, 5] or without a body are dropped.
    """

    record_kind = RECORD_KIND_REVIEWS

    def __init__(self, profile: RetailerProfile):
        self.profile = profile
        self.retailer_id = profile.slug
        super().__init__()

    def can_handle(self, url: str) -> bool:
        return self.profile.supports_reviews and self.profile.is_product_url(url)

    def extract(self, html: str, url: str) -> Iterator[Record]:
        soup = parse_html(html)
        if is_blocked_page(html, soup, self.profile.block_markers):
            self.logger.warning("blocked_page_detected", url=url)
            return

        extracted_at = utc_now_iso()
        count = 0
        source = SOURCE_STRUCTURED_DATA
        for review in self._from_structured(StructuredDataReader(soup).reviews(), url, extracted_at):
            count += 1
            yield review

        if count == 0:
            source = SOURCE_DOM
            containers = select_all(soup, self.profile.reviews.container, "review_container")
            for review in self._from_dom(containers, url, extracted_at):
                count += 1
                yield review

        self.logger.info("reviews_extracted", url=url, count=count, source=source)

    def _from_structured(
        self, nodes: List[Dict[str, Any]], url: str, extracted_at: str
    ) -> Iterator[ReviewRecord]:
        for index, node in enumerate(nodes):
            rating_node = node.get("reviewRating")
            rating = None
            if isinstance(rating_node, dict):
                best = rating_node.get("bestRating")
                value = rating_node.get("ratingValue")
                # No ratingValue means no rating, whatever the scale says
                if value not in (None, ""):
                    rating = parse_rating(value if best in (None, "") else f"{value}/{best}")
            elif rating_node is not None:
                rating = parse_rating(rating_node)

            record = self._build(
                index=index,
                url=url,
                source=SOURCE_STRUCTURED_DATA,
                extracted_at=extracted_at,
                rating=rating,
                body=text_value(node.get("reviewBody")) or text_value(node.get("description")),
                author=text_value(node.get("author")),
                title=text_value(node.get("name")) or text_value(node.get("headline")),
                review_date=parse_review_date(node.get("datePublished")),
                review_id=text_value(node.get("identifier")) or text_value(node.get("@id")),
            )
            if record is not None:
                yield record

    def _from_dom(self, containers: List[Tag], url: str, extracted_at: str) -> Iterator[ReviewRecord]:
        selectors = self.profile.reviews
        for index, container in enumerate(containers):
            date_element = select_first(container, selectors.date, "review_date")
            review_date = None
            if date_element is not None:
                review_date = parse_review_date(
                    first_attr(date_element, ("datetime", "content")) or element_text(date_element)
                )

            record = self._build(
                index=index,
                url=url,
                source=SOURCE_DOM,
                extracted_at=extracted_at,
                rating=self._dom_rating(container),
                body=select_text(container, selectors.body, "review_body"),
                author=select_text(container, selectors.author, "review_author"),
                title=select_text(container, selectors.title, "review_title"),
                review_date=review_date,
                verified=self._dom_verified(container),
                helpful_count=self._dom_helpful(container),
                review_id=self._dom_review_id(container),
            )
            if record is not None:
                yield record

    def _dom_rating(self, container: Tag) -> Optional[float]:
        selectors = self.profile.reviews
        element = select_first(
            container,
            selectors.rating,
            "review_rating",
            accept=lambda el: self._rating_from_element(el) is not None,
        )
        if element is not None:
            return self._rating_from_element(element)

        # Rating attribute on the container itself, e.g. data-rating="4"
        for attr in ("data-rating", "data-score", "data-stars"):
            rating = parse_rating(first_attr(container, (attr,)), selectors.max_rating)
            if rating is not None:
                return rating

        filled = select_all(container, selectors.filled_stars, "review_stars")
        if 0 < len(filled) <= 5:
            return float(len(filled))
        return None

    def _rating_from_element(self, element: Tag) -> Optional[float]:
        selectors = self.profile.reviews
        # Star classes like "a-star-4" or "rating-4-5" are always out of 5
        for class_name in element.get("class") or []:
            match = _STAR_CLASS_RE.search(class_name)
            if match:
                value = f"{match.group(1)}.{match.group(2)}" if match.group(2) else match.group(1)
                return parse_rating(value)

        # Star bars drawn as a percentage width
        width = _WIDTH_RE.search(element.get("style") or "")
        if width:
            return parse_rating(f"{width.group(1)}%")

        for attr in selectors.rating_attrs:
            rating = parse_rating(first_attr(element, (attr,)), selectors.max_rating)
            if rating is not None:
                return rating
        return parse_rating(element_text(element), selectors.max_rating)

    def _dom_verified(self, container: Tag) -> bool:
        if select_first(container, self.profile.reviews.verified, "review_verified") is not None:
            return True
        return bool(_VERIFIED_RE.search(container.get_text(" ")))

    def _dom_helpful(self, container: Tag) -> int:
        element = select_first(container, self.profile.reviews.helpful, "review_helpful")
        if element is None:
            return 0
        return parse_count(first_attr(element, ("data-helpful-count",)) or element_text(element))

    def _dom_review_id(self, container: Tag) -> Optional[str]:
        selectors = self.profile.reviews
        review_id = first_attr(container, selectors.id_attrs)
        if not review_id:
            return None
        for prefix in selectors.id_prefixes:
            if review_id.startswith(prefix):
                return review_id[len(prefix):] or None
        return review_id

    def _build(
        self,
        index: int,
        url: str,
        source: str,
        extracted_at: str,
        rating: Optional[float],
        body: Optional[str],
        author: Optional[str] = None,
        title: Optional[str] = None,
        review_date: Optional[date] = None,
        verified: bool = False,
        helpful_count: int = 0,
        review_id: Optional[str] = None,
    ) -> Optional[ReviewRecord]:
        body = clean_text(body)
        if rating is None or not body:
            self.logger.debug("review_discarded", url=url, index=index, has_rating=rating is not None)
            return None

        author = clean_text(author)
        external_id = review_id or self.generate_review_id(url, author, body, index)

        try:
            return ReviewRecord(
                external_id=external_id,
                rating=rating,
                body=body,
                author=author,
                title=clean_text(title),
                verified_purchase=verified,
                review_date=review_date,
                helpful_count=max(0, helpful_count),
                metadata={
                    "source": source,
                    "source_url": url,
                    "retailer": self.retailer_id,
                    "extracted_at": extracted_at,
                },
            )
        except ValueError as e:
            self.logger.debug("review_discarded", url=url, index=index, error=str(e))
            return None

    def generate_review_id(self, url: str, author: Optional[str], body: str, index: int) -> str:
        """Stable id for reviews that carry none: retailer, content hash and position."""
        digest = hashlib.md5(f"{url}|{author or ''}|{body}".encode("utf-8")).hexdigest()[:12]
        return f"{self.retailer_id}-review-{digest}-{index}"
