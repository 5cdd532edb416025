"""Product details extraction: JSON-LD first, DOM selector chains second."""

import re
from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from retailcrawl.crawler.base import (
    Extractor,
    ProductDetailsRecord,
    RECORD_KIND_DETAILS,
    Record,
    SOURCE_DOM,
    SOURCE_STRUCTURED_DATA,
    utc_now_iso,
)
from retailcrawl.crawler.extractors.blocking import is_blocked_page
from retailcrawl.crawler.extractors.selectors import (
    element_text,
    first_attr,
    parse_html,
    select_first,
    select_text,
    select_union,
    try_select,
)
from retailcrawl.crawler.extractors.structured_data import (
    StructuredDataReader,
    as_list,
    availability_in_stock,
    barcode_of,
    image_urls,
    offer_price,
    offers_of,
    text_value,
)
from retailcrawl.crawler.retailers.profile import RetailerProfile
from retailcrawl.crawler.utils.brands import brand_from_title
from retailcrawl.crawler.utils.category import category_from_breadcrumbs, category_from_url
from retailcrawl.crawler.utils.normalizer import (
    absolutize_url,
    canonicalize_url,
    clean_text,
    extract_price_from_text,
    normalize_barcode,
    parse_quantity,
    parse_weight,
    price_from_structured,
)


# Image URLs that are never real product images
_PLACEHOLDER_IMAGE_RE = re.compile(r"placeholder|loading|spinner|blank\.gif|^data:", re.IGNORECASE)

# UN/CEFACT unit codes used by schema.org QuantitativeValue
UNIT_CODES = {"KGM": "kg", "GRM": "g", "LTR": "l", "MLT": "ml", "LBR": "lb", "ONZ": "oz"}

_OUT_OF_STOCK_RE = re.compile(r"out of stock|currently unavailable|unavailable|sold out", re.IGNORECASE)
_IN_STOCK_RE = re.compile(r"in stock|available|add to (?:basket|trolley|cart)", re.IGNORECASE)


class ProductDetailsExtractor(Extractor):
    """Builds a ProductDetailsRecord from a product page.

    Structured data is used when it provides a product name; any field it
    lacks is filled from the DOM chains, one field at a time. Without a usable
    Product node every field comes from the DOM. A page without a title
    yields nothing; a page without a price yields a record priced at 0.
    """

    record_kind = RECORD_KIND_DETAILS

    def __init__(self, profile: RetailerProfile):
        """Initialize the extractor.

        Args:
            profile: Retailer profile supplying selectors and URL rules
        """
        self.profile = profile
        self.retailer_id = profile.slug
        super().__init__()

    def can_handle(self, url: str) -> bool:
        return self.profile.is_product_url(url)

    def extract(self, html: str, url: str) -> Iterator[Record]:
        soup = parse_html(html)
        if is_blocked_page(html, soup, self.profile.block_markers):
            self.logger.warning("blocked_page_detected", url=url)
            return

        product = StructuredDataReader(soup).product()
        structured = product if product and text_value(product.get("name")) else None
        source = SOURCE_STRUCTURED_DATA if structured else SOURCE_DOM
        sd: Dict[str, Any] = structured or {}
        selectors = self.profile.details

        title = text_value(sd.get("name")) or select_text(soup, selectors.title, "title")
        if not title:
            self.logger.warning("product_title_missing", url=url)
            return

        offers = offers_of(sd)
        price = self._structured_price(offers)
        if price is None:
            price = self._dom_price(soup, selectors.price, "price")
        if price is None:
            self.logger.warning("product_price_missing", url=url, title=title)
            price = 0

        original_price = self._dom_price(soup, selectors.original_price, "original_price")
        if original_price is not None and original_price <= price:
            original_price = None

        weight = (
            parse_weight(self._structured_weight(sd))
            or parse_weight(select_text(soup, selectors.weight, "weight"))
            or parse_weight(title)
            or 0
        )

        metadata = {
            "source": source,
            "source_url": url,
            "retailer": self.retailer_id,
            "extracted_at": utc_now_iso(),
        }
        metadata.update(self._extra_metadata(soup, sd))

        try:
            record = ProductDetailsRecord(
                external_id=self._external_id(soup, sd, url),
                title=title,
                price_minor_units=price,
                currency=self._currency(offers),
                brand=self._brand(soup, sd, title),
                description=text_value(sd.get("description"))
                or select_text(soup, selectors.description, "description"),
                original_price_minor_units=original_price,
                in_stock=self._in_stock(soup, offers),
                weight_grams=weight,
                quantity=parse_quantity(title, self.profile.quantity_patterns) or 0,
                images=tuple(self._images(soup, sd, url)),
                ingredients=select_text(soup, selectors.ingredients, "ingredients"),
                category=self._category(soup, url),
                barcode=barcode_of(product) or self._dom_barcode(soup),
                metadata=metadata,
            )
        except ValueError as e:
            self.logger.warning("product_record_invalid", url=url, error=str(e))
            return

        self.logger.info(
            "product_details_extracted",
            url=url,
            external_id=record.external_id,
            source=source,
            price=record.price_minor_units,
        )
        yield record

    # ------------------------------------------------------------------
    # Prices
    # ------------------------------------------------------------------

    @staticmethod
    def _structured_price(offers: List[Dict[str, Any]]) -> Optional[int]:
        for offer in offers:
            price = price_from_structured(offer_price(offer))
            if price is not None:
                return price
        return None

    @staticmethod
    def _element_price(element: Tag) -> Optional[int]:
        content = element.get("content")
        if content:
            price = price_from_structured(content)
            if price is not None:
                return price
        return extract_price_from_text(element_text(element))

    def _dom_price(self, soup: BeautifulSoup, selectors, context: str) -> Optional[int]:
        element = select_first(
            soup, selectors, context, accept=lambda el: self._element_price(el) is not None
        )
        return self._element_price(element) if element is not None else None

    def _currency(self, offers: List[Dict[str, Any]]) -> str:
        for offer in offers:
            currency = offer.get("priceCurrency")
            if isinstance(currency, str) and currency.strip():
                return currency.strip().upper()
        return self.profile.currency

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def _external_id(self, soup: BeautifulSoup, sd: Dict[str, Any], url: str) -> str:
        """URL pattern, then structured sku/productID/mpn, then DOM attributes."""
        external_id = self.profile.external_id_from_url(url)
        if external_id:
            return external_id

        for key in ("sku", "productID", "mpn"):
            value = text_value(sd.get(key))
            if value:
                return value

        selectors = self.profile.details
        element = select_first(
            soup,
            selectors.external_id,
            "external_id",
            accept=lambda el: first_attr(el, selectors.external_id_attrs) is not None,
        )
        value = first_attr(element, selectors.external_id_attrs)
        if value:
            return value

        return canonicalize_url(url)

    def _brand(self, soup: BeautifulSoup, sd: Dict[str, Any], title: str) -> Optional[str]:
        brand = text_value(sd.get("brand"))
        if not brand:
            brand = self._clean_brand(select_text(soup, self.profile.details.brand, "brand"))
        if not brand:
            brand = brand_from_title(title, self.profile.known_brands, self.profile.brand_skip_words)
        return brand

    def _clean_brand(self, text: Optional[str]) -> Optional[str]:
        if not text:
            return None
        selectors = self.profile.details
        for prefix in selectors.brand_prefixes:
            if text.lower().startswith(prefix):
                text = text[len(prefix):]
        for suffix in selectors.brand_suffixes:
            if text.lower().endswith(suffix):
                text = text[: -len(suffix)]
        return clean_text(text)

    def _dom_barcode(self, soup: BeautifulSoup) -> Optional[str]:
        selectors = self.profile.details
        for selector in selectors.barcode:
            for element in try_select(soup, selector, "barcode") or []:
                barcode = normalize_barcode(first_attr(element, selectors.barcode_attrs))
                if barcode:
                    return barcode
        return None

    # ------------------------------------------------------------------
    # Other fields
    # ------------------------------------------------------------------

    @staticmethod
    def _structured_weight(sd: Dict[str, Any]) -> Optional[str]:
        weight = sd.get("weight")
        if isinstance(weight, dict):
            value = weight.get("value")
            unit = weight.get("unitText") or UNIT_CODES.get(str(weight.get("unitCode", "")).upper(), "")
            if value is not None:
                return f"{value} {unit}".strip()
            return None
        return text_value(weight)

    def _in_stock(self, soup: BeautifulSoup, offers: List[Dict[str, Any]]) -> bool:
        for offer in offers:
            availability = availability_in_stock(offer)
            if availability is not None:
                return availability

        selectors = self.profile.details
        availability = select_text(soup, selectors.availability, "availability")
        if availability:
            if _OUT_OF_STOCK_RE.search(availability):
                return False
            if _IN_STOCK_RE.search(availability):
                return True

        if select_first(soup, selectors.out_of_stock, "out_of_stock") is not None:
            return False
        return True

    def _images(self, soup: BeautifulSoup, sd: Dict[str, Any], url: str) -> Iterator[str]:
        selectors = self.profile.details
        candidates = image_urls(sd)
        for element in select_union(soup, selectors.images, "images"):
            src = first_attr(element, selectors.image_attrs)
            if src:
                candidates.append(src)

        for candidate in candidates:
            if _PLACEHOLDER_IMAGE_RE.search(candidate):
                continue
            absolute = absolutize_url(candidate, url)
            if absolute:
                yield absolute

    def _category(self, soup: BeautifulSoup, url: str) -> Optional[str]:
        crumbs = [
            element_text(el) or ""
            for el in select_union(soup, self.profile.details.breadcrumbs, "breadcrumbs")
        ]
        return category_from_breadcrumbs(crumbs) or category_from_url(url, self.profile.category_rules)

    def _extra_metadata(self, soup: BeautifulSoup, sd: Dict[str, Any]) -> Dict[str, Any]:
        selectors = self.profile.details
        extra: Dict[str, Any] = {}

        if selectors.loyalty_price:
            loyalty = self._dom_price(soup, selectors.loyalty_price, "loyalty_price")
            if loyalty is not None:
                extra["loyalty_price_minor_units"] = loyalty

        if selectors.offer:
            offer_text = select_text(soup, selectors.offer, "offer")
            if offer_text:
                extra["offer_text"] = offer_text

        rating = sd.get("aggregateRating")
        rating_value = review_count = None
        for aggregate in as_list(rating):
            if isinstance(aggregate, dict):
                rating_value = aggregate.get("ratingValue")
                review_count = aggregate.get("reviewCount") or aggregate.get("ratingCount")
                break

        if rating_value is None:
            rating_value = select_text(soup, selectors.rating, "rating")
        if review_count is None:
            review_count = select_text(soup, selectors.review_count, "review_count")

        rating_number = _to_float(rating_value)
        if rating_number is not None:
            extra["rating_value"] = rating_number
        count_match = re.search(r"\d[\d,]*", str(review_count)) if review_count is not None else None
        if count_match:
            extra["review_count"] = int(count_match.group(0).replace(",", ""))

        return extra


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    match = re.search(r"\d+(?:\.\d+)?", str(value))
    return float(match.group(0)) if match else None
