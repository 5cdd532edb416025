"""Data-driven retailer profiles.

A RetailerProfile holds everything that differs between retailers: hosts,
URL shapes, selector chains and heuristic tables. The three generic
extractors read a profile and never branch on the retailer slug, so adding
a retailer means adding a profile module, not a class.

Selector fields default to shared tuples; a retailer overrides a field only
where its markup differs.
"""

import re
from dataclasses import dataclass, field
from typing import Mapping, Optional, Pattern, Sequence, Tuple
from urllib.parse import urlparse

from retailcrawl.crawler.extractors.pagination import (
    DEFAULT_NEXT_PAGE_SELECTORS,
    DEFAULT_PAGE_NUMBER_SELECTORS,
)
from retailcrawl.crawler.utils.brands import BRAND_SKIP_WORDS, KNOWN_BRANDS
from retailcrawl.crawler.utils.category import CategoryRule
from retailcrawl.crawler.utils.normalizer import (
    DEFAULT_QUANTITY_PATTERNS,
    canonicalize_url,
    url_host,
)


# ---------------------------------------------------------------------------
# Listing pages
# ---------------------------------------------------------------------------

DEFAULT_LINK_SELECTORS = ("a[href]",)


@dataclass(frozen=True)
class ListingRules:
    """How product links and the next page are found on a listing page.

    Attributes:
        link_selectors: Selectors whose union yields product link elements
        link_attrs: Attributes read from each link element, in order
        inline_url_patterns: Regexes run over the raw HTML; group 1 is a URL
            or path (for links that only exist in embedded JSON)
        inline_id_url_template: URL built from inline id matches, e.g.
            "https://host/product/{id}"
        inline_id_patterns: Regexes whose group 1 is a product id
        supports_pagination: Whether a PaginationToken may be emitted
        next_page_selectors: Explicit "next" link selectors
        page_number_selectors: Numbered pagination link selectors
        strip_query: Drop the whole query string from product URLs
    """

    link_selectors: Tuple[str, ...] = DEFAULT_LINK_SELECTORS
    link_attrs: Tuple[str, ...] = ("href",)
    inline_url_patterns: Tuple[str, ...] = ()
    inline_id_url_template: Optional[str] = None
    inline_id_patterns: Tuple[str, ...] = ()
    supports_pagination: bool = True
    next_page_selectors: Tuple[str, ...] = DEFAULT_NEXT_PAGE_SELECTORS
    page_number_selectors: Tuple[str, ...] = DEFAULT_PAGE_NUMBER_SELECTORS
    strip_query: bool = False


# ---------------------------------------------------------------------------
# Product pages
# ---------------------------------------------------------------------------

DEFAULT_TITLE_SELECTORS = (
    "h1[data-testid='product-title']",
    "h1.product-title",
    "h1.product-name",
    ".product-title h1",
    "[itemprop='name']",
    "h1",
)
DEFAULT_PRICE_SELECTORS = (
    "[data-testid='product-price']",
    "[itemprop='price']",
    ".product-price .price",
    ".price-current",
    ".current-price",
    ".product-price",
    ".price",
)
DEFAULT_ORIGINAL_PRICE_SELECTORS = (
    ".was-price",
    ".price-was",
    ".old-price",
    ".rrp",
    "del .price",
    "del",
    "s",
)
DEFAULT_DESCRIPTION_SELECTORS = (
    "[data-testid='product-description']",
    "#product-description",
    ".product-description",
    "[itemprop='description']",
    ".description",
)
DEFAULT_IMAGE_SELECTORS = (
    ".product-gallery img",
    ".product-image img",
    ".product-images img",
    "[data-testid='product-image'] img",
    "img[itemprop='image']",
)
DEFAULT_IMAGE_ATTRS = ("src", "data-src", "data-lazy-src")
DEFAULT_BRAND_SELECTORS = (
    "[itemprop='brand'] [itemprop='name']",
    "[itemprop='brand']",
    "[data-testid='product-brand']",
    ".product-brand",
    ".brand",
)
DEFAULT_WEIGHT_SELECTORS = (
    "[data-testid='product-weight']",
    ".product-weight",
    ".product-size",
    ".pack-size",
)
DEFAULT_OUT_OF_STOCK_SELECTORS = (
    ".out-of-stock",
    "[data-testid='out-of-stock']",
    ".sold-out",
    ".unavailable",
)
DEFAULT_AVAILABILITY_SELECTORS = (
    "[data-testid='availability']",
    ".availability",
    ".stock-status",
)
DEFAULT_EXTERNAL_ID_SELECTORS = (
    "[data-product-id]",
    "[data-sku]",
    "[data-productid]",
    "[itemprop='sku']",
)
DEFAULT_EXTERNAL_ID_ATTRS = ("data-product-id", "data-sku", "data-productid", "content")
DEFAULT_INGREDIENTS_SELECTORS = (
    "[data-testid='ingredients']",
    ".ingredients",
    "#ingredients",
    ".product-ingredients",
)
DEFAULT_BREADCRUMB_SELECTORS = (
    "nav[aria-label='breadcrumb'] a",
    ".breadcrumb a",
    ".breadcrumbs a",
    "[itemtype*='BreadcrumbList'] [itemprop='name']",
)
DEFAULT_BARCODE_SELECTORS = (
    "meta[property='product:ean']",
    "meta[property='product:gtin']",
    "meta[property='product:upc']",
    "meta[property='og:gtin']",
    "meta[property='og:ean']",
    "meta[name='ean']",
    "meta[name='gtin']",
    "meta[name='upc']",
    "meta[itemprop='gtin']",
    "meta[itemprop='gtin13']",
    "meta[itemprop='gtin8']",
    "meta[itemprop='gtin14']",
    "meta[itemprop='ean']",
    "[data-barcode]",
    "[data-ean]",
    "[data-gtin]",
    "[data-upc]",
)
DEFAULT_BARCODE_ATTRS = ("content", "data-barcode", "data-ean", "data-gtin", "data-upc")
DEFAULT_RATING_SELECTORS = (
    "[itemprop='ratingValue']",
    ".rating-value",
    ".average-rating",
)
DEFAULT_REVIEW_COUNT_SELECTORS = (
    "[itemprop='reviewCount']",
    ".review-count",
    ".reviews-count",
)


@dataclass(frozen=True)
class DetailsSelectors:
    """Selector chains for the product details page."""

    title: Tuple[str, ...] = DEFAULT_TITLE_SELECTORS
    price: Tuple[str, ...] = DEFAULT_PRICE_SELECTORS
    original_price: Tuple[str, ...] = DEFAULT_ORIGINAL_PRICE_SELECTORS
    loyalty_price: Tuple[str, ...] = ()
    offer: Tuple[str, ...] = ()
    description: Tuple[str, ...] = DEFAULT_DESCRIPTION_SELECTORS
    images: Tuple[str, ...] = DEFAULT_IMAGE_SELECTORS
    image_attrs: Tuple[str, ...] = DEFAULT_IMAGE_ATTRS
    brand: Tuple[str, ...] = DEFAULT_BRAND_SELECTORS
    weight: Tuple[str, ...] = DEFAULT_WEIGHT_SELECTORS
    out_of_stock: Tuple[str, ...] = DEFAULT_OUT_OF_STOCK_SELECTORS
    availability: Tuple[str, ...] = DEFAULT_AVAILABILITY_SELECTORS
    external_id: Tuple[str, ...] = DEFAULT_EXTERNAL_ID_SELECTORS
    external_id_attrs: Tuple[str, ...] = DEFAULT_EXTERNAL_ID_ATTRS
    ingredients: Tuple[str, ...] = DEFAULT_INGREDIENTS_SELECTORS
    breadcrumbs: Tuple[str, ...] = DEFAULT_BREADCRUMB_SELECTORS
    barcode: Tuple[str, ...] = DEFAULT_BARCODE_SELECTORS
    barcode_attrs: Tuple[str, ...] = DEFAULT_BARCODE_ATTRS
    rating: Tuple[str, ...] = DEFAULT_RATING_SELECTORS
    review_count: Tuple[str, ...] = DEFAULT_REVIEW_COUNT_SELECTORS
    # Brand text prefixes to strip ("Visit the X Store", "Brand: X")
    brand_prefixes: Tuple[str, ...] = ("brand:",)
    brand_suffixes: Tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------

DEFAULT_REVIEW_CONTAINER_SELECTORS = (
    ".review-item",
    ".customer-review",
    "[data-review]",
    ".reviews-list .review",
    ".product-review",
    "[itemtype*='Review']",
    "[itemprop='review']",
)
DEFAULT_REVIEW_RATING_SELECTORS = (
    "[itemprop='ratingValue']",
    "[data-rating]",
    "[data-score]",
    "[data-stars]",
    ".review-rating",
    ".rating",
    ".star-rating",
    ".stars",
)
DEFAULT_FILLED_STAR_SELECTORS = (
    ".star-filled, .star-full, .fa-star:not(.fa-star-o), .icon-star-filled, .star.active",
)
DEFAULT_REVIEW_AUTHOR_SELECTORS = (
    "[itemprop='author']",
    ".review-author",
    ".author-name",
    ".reviewer-name",
)
DEFAULT_REVIEW_TITLE_SELECTORS = (
    ".review-title",
    ".review-headline",
    "[itemprop='name']",
)
DEFAULT_REVIEW_BODY_SELECTORS = (
    "[itemprop='reviewBody']",
    ".review-body",
    ".review-text",
    ".review-content",
    ".description",
)
DEFAULT_REVIEW_DATE_SELECTORS = (
    "[itemprop='datePublished']",
    ".review-date",
    ".date",
    "time",
)
DEFAULT_REVIEW_VERIFIED_SELECTORS = (
    ".verified-purchase",
    ".verified-buyer",
    "[data-verified='true']",
    ".badge-verified",
    ".verified",
)
DEFAULT_REVIEW_HELPFUL_SELECTORS = (
    ".helpful-count",
    ".vote-count",
    "[data-helpful-count]",
    ".upvotes",
    ".helpful-votes",
)
DEFAULT_RATING_ATTRS = ("content", "data-rating", "data-score", "data-stars", "aria-label", "title")
DEFAULT_REVIEW_ID_ATTRS = ("data-review-id", "id")


@dataclass(frozen=True)
class ReviewSelectors:
    """Selector chains for reviews on a product page.

    Attributes:
        filled_stars: Star icons counted when no rating element parses
        max_rating: Scale of bare numeric ratings; ratings are always
            normalized to 0-5
        id_prefixes: Prefixes stripped from review id attributes
    """

    container: Tuple[str, ...] = DEFAULT_REVIEW_CONTAINER_SELECTORS
    rating: Tuple[str, ...] = DEFAULT_REVIEW_RATING_SELECTORS
    rating_attrs: Tuple[str, ...] = DEFAULT_RATING_ATTRS
    filled_stars: Tuple[str, ...] = DEFAULT_FILLED_STAR_SELECTORS
    author: Tuple[str, ...] = DEFAULT_REVIEW_AUTHOR_SELECTORS
    title: Tuple[str, ...] = DEFAULT_REVIEW_TITLE_SELECTORS
    body: Tuple[str, ...] = DEFAULT_REVIEW_BODY_SELECTORS
    date: Tuple[str, ...] = DEFAULT_REVIEW_DATE_SELECTORS
    verified: Tuple[str, ...] = DEFAULT_REVIEW_VERIFIED_SELECTORS
    helpful: Tuple[str, ...] = DEFAULT_REVIEW_HELPFUL_SELECTORS
    id_attrs: Tuple[str, ...] = DEFAULT_REVIEW_ID_ATTRS
    id_prefixes: Tuple[str, ...] = ("review-",)
    max_rating: int = 5


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

def _compile(patterns: Sequence[str]) -> Tuple[Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


@dataclass(frozen=True)
class RetailerProfile:
    """Per-retailer configuration consumed by the generic extractors.

    Attributes:
        slug: Retailer identifier (e.g., "tesco")
        name: Display name
        domains: Hosts served by this retailer, without "www."
        product_url_patterns: Regexes identifying product (details) URLs
        listing_url_pattern: Optional regex a listing URL must also match
        external_id_patterns: Regexes whose group 1 is the product id
        natural_key_patterns: Regexes whose group 1 is a dedup key (ASIN)
        canonical_url_template: Product URL rebuilt from the natural key
        category_rules: Category rule table (None uses the generic table)
        quantity_patterns: Pack quantity patterns, first match wins
        known_brands: Brands matched in titles before the capitalised-word
            heuristic
        brand_skip_words: Words never taken as a brand
        block_markers: Extra raw-HTML block markers
        starting_urls: Listing pages a retailer crawl starts from
        headers: Extra request headers for this retailer
        supports_reviews: Whether product pages carry reviews at all
    """

    slug: str
    name: str
    domains: Tuple[str, ...]
    product_url_patterns: Tuple[str, ...]
    listing_url_pattern: Optional[str] = None
    external_id_patterns: Tuple[str, ...] = ()
    natural_key_patterns: Tuple[str, ...] = ()
    canonical_url_template: Optional[str] = None
    listing: ListingRules = field(default_factory=ListingRules)
    details: DetailsSelectors = field(default_factory=DetailsSelectors)
    reviews: ReviewSelectors = field(default_factory=ReviewSelectors)
    category_rules: Optional[Tuple[CategoryRule, ...]] = None
    quantity_patterns: Tuple[Pattern, ...] = tuple(DEFAULT_QUANTITY_PATTERNS)
    known_brands: Tuple[str, ...] = KNOWN_BRANDS
    brand_skip_words: frozenset = BRAND_SKIP_WORDS
    block_markers: Tuple[str, ...] = ()
    starting_urls: Tuple[str, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    currency: str = "GBP"
    supports_reviews: bool = True

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.slug:
            raise ValueError("slug is required")
        if not self.domains:
            raise ValueError(f"{self.slug}: at least one domain is required")
        if not self.product_url_patterns:
            raise ValueError(f"{self.slug}: product_url_patterns is required")
        object.__setattr__(self, "_product_res", _compile(self.product_url_patterns))
        object.__setattr__(
            self,
            "_listing_re",
            re.compile(self.listing_url_pattern, re.IGNORECASE) if self.listing_url_pattern else None,
        )
        object.__setattr__(self, "_external_id_res", _compile(self.external_id_patterns))
        object.__setattr__(self, "_natural_key_res", _compile(self.natural_key_patterns))

    def handles_host(self, url: str) -> bool:
        """Check the URL's host against the retailer's domains (subdomains included)."""
        if not url:
            return False
        host = url_host(url)
        return bool(host) and any(host == d or host.endswith(f".{d}") for d in self.domains)

    def _path_and_query(self, url: str) -> str:
        parsed = urlparse(url)
        return f"{parsed.path}?{parsed.query}" if parsed.query else parsed.path

    def is_product_url(self, url: str) -> bool:
        if not self.handles_host(url):
            return False
        target = self._path_and_query(url)
        return any(p.search(target) for p in self._product_res)

    def is_listing_url(self, url: str) -> bool:
        if not self.handles_host(url) or self.is_product_url(url):
            return False
        if self._listing_re is None:
            return True
        return bool(self._listing_re.search(self._path_and_query(url)))

    def natural_key(self, url: str) -> Optional[str]:
        for pattern in self._natural_key_res:
            match = pattern.search(url)
            if match:
                return match.group(1).upper()
        return None

    def external_id_from_url(self, url: str) -> Optional[str]:
        for pattern in self._external_id_res:
            match = pattern.search(url)
            if match:
                return match.group(1)
        return self.natural_key(url)

    def canonical_product_url(self, url: str) -> str:
        """Canonical URL for a product link: template, then stripped URL."""
        key = self.natural_key(url)
        if key and self.canonical_url_template:
            return self.canonical_url_template.format(key=key)

        canonical = canonicalize_url(url)
        if self.listing.strip_query:
            canonical = canonical.split("?", 1)[0]
        return canonical

    @property
    def start_url(self) -> Optional[str]:
        return self.starting_urls[0] if self.starting_urls else None
