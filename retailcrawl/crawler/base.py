"""Record types and the extractor interface.

Every extractor turns one fetched page into a lazy sequence of records.
Records are immutable once built; the orchestrator only reads them to make
dedup and pagination decisions before handing them downstream.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

import structlog

from retailcrawl.crawler.utils.normalizer import format_price


RECORD_KIND_LISTING = "listing"
RECORD_KIND_DETAILS = "details"
RECORD_KIND_REVIEWS = "reviews"
RECORD_KINDS = (RECORD_KIND_LISTING, RECORD_KIND_DETAILS, RECORD_KIND_REVIEWS)

SOURCE_STRUCTURED_DATA = "structured-data"
SOURCE_DOM = "dom"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _freeze(record: Any, metadata: Optional[Mapping[str, Any]]) -> None:
    object.__setattr__(record, "metadata", MappingProxyType(dict(metadata or {})))


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class RecordMixin:
    """Shared serialization for record dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in self.__dataclass_fields__}
        data["type"] = type(self).__name__
        return _plain(data)


@dataclass(frozen=True)
class ListingUrlRecord(RecordMixin):
    """A candidate product page discovered on a listing page."""

    url: str  # Canonical product URL
    retailer_id: str
    category: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.url:
            raise ValueError("url is required")
        if not self.retailer_id:
            raise ValueError("retailer_id is required")
        _freeze(self, self.metadata)

    @property
    def dedup_key(self) -> str:
        """Natural key when the retailer has one, otherwise the canonical URL."""
        return self.metadata.get("natural_key") or self.url


@dataclass(frozen=True)
class PaginationToken(RecordMixin):
    """The next page of a listing. Consumed by the orchestrator only."""

    url: str
    retailer_id: str
    page_number: int
    category: Optional[str] = None
    discovered_from: Optional[str] = None

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.url:
            raise ValueError("url is required")
        if self.page_number < 1:
            raise ValueError("page_number must be at least 1")


@dataclass(frozen=True)
class ProductDetailsRecord(RecordMixin):
    """Normalized product data extracted from a product page."""

    external_id: str  # Retailer-specific product ID
    title: str
    price_minor_units: int = 0
    currency: str = "GBP"
    brand: Optional[str] = None
    description: Optional[str] = None
    original_price_minor_units: Optional[int] = None
    in_stock: bool = True
    weight_grams: int = 0
    quantity: int = 0
    images: Tuple[str, ...] = ()
    ingredients: Optional[str] = None
    category: Optional[str] = None
    barcode: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.external_id:
            raise ValueError("external_id is required")
        if not self.title:
            raise ValueError("title is required")
        if self.price_minor_units is None or self.price_minor_units < 0:
            raise ValueError("price_minor_units must be a non-negative integer")
        if self.original_price_minor_units is not None and self.original_price_minor_units < 0:
            raise ValueError("original_price_minor_units must not be negative")
        if self.weight_grams < 0 or self.quantity < 0:
            raise ValueError("weight_grams and quantity must not be negative")
        object.__setattr__(self, "images", tuple(dict.fromkeys(self.images)))
        _freeze(self, self.metadata)

    def has_discount(self) -> bool:
        return (
            self.original_price_minor_units is not None
            and self.original_price_minor_units > self.price_minor_units
        )

    def discount_percentage(self) -> Optional[Decimal]:
        """Discount off the original price, rounded to 2 decimal places.

        Returns:
            Percentage, or None when the product is not discounted
        """
        if not self.has_discount():
            return None
        original = Decimal(self.original_price_minor_units)
        return round((original - self.price_minor_units) / original * 100, 2)

    def formatted_price(self) -> str:
        return format_price(self.price_minor_units, self.currency)


@dataclass(frozen=True)
class ReviewRecord(RecordMixin):
    """A single customer review."""

    external_id: str
    rating: float  # 0 < rating <= 5
    body: str
    author: Optional[str] = None
    title: Optional[str] = None
    verified_purchase: bool = False
    review_date: Optional[date] = None
    helpful_count: int = 0
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.external_id:
            raise ValueError("external_id is required")
        if self.rating is None or not 0 < self.rating <= 5:
            raise ValueError(f"rating must be in (0, 5]: {self.rating}")
        if not self.body or not self.body.strip():
            raise ValueError("body is required")
        if self.helpful_count < 0:
            raise ValueError("helpful_count must not be negative")
        _freeze(self, self.metadata)


Record = Union[ListingUrlRecord, PaginationToken, ProductDetailsRecord, ReviewRecord]


class Extractor(ABC):
    """Turns one fetched page into records.

    Implementations must not perform I/O and must not raise for malformed
    input: parsing failures are handled at the narrowest scope and treated as
    "no match", and a blocked or unrecognizable page yields nothing.
    """

    record_kind: str = ""  # One of RECORD_KINDS
    retailer_id: str = ""

    def __init__(self):
        """Initialize the extractor logger."""
        self.logger = structlog.get_logger(__name__).bind(
            retailer=self.retailer_id, kind=self.record_kind
        )

    @abstractmethod
    def can_handle(self, url: str) -> bool:
        """Check whether this extractor understands pages at this URL.

        Args:
            url: Absolute page URL

        Returns:
            True if extract() should be run for the URL
        """
        pass

    @abstractmethod
    def extract(self, html: str, url: str) -> Iterator[Record]:
        """Extract records from a page.

        Args:
            html: Raw page HTML
            url: URL the page was fetched from

        Yields:
            Records, followed by at most one PaginationToken
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} retailer={self.retailer_id!r} kind={self.record_kind!r}>"
