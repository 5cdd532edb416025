"""schema.org JSON-LD reader.

Reads every `<script type="application/ld+json">` block on a page. Blocks
that fail to decode are skipped one at a time, so a single malformed block
never hides a valid one further down the page.
"""

import json
from typing import Any, Dict, Iterator, List, Optional

import structlog
from bs4 import BeautifulSoup

from retailcrawl.crawler.utils.normalizer import normalize_barcode


logger = structlog.get_logger(__name__)

GTIN_FIELDS = ("gtin13", "gtin", "gtin8", "gtin14", "gtin12", "ean", "upc")
_IDENTIFIER_TYPES = ("ean", "gtin", "upc")


def _types(node: Dict[str, Any]) -> List[str]:
    value = node.get("@type")
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)] if value is not None else []


def is_type(node: Any, type_name: str) -> bool:
    """Check a node's @type, which may be a string or a list of strings."""
    if not isinstance(node, dict):
        return False
    return any(t == type_name or t.endswith(f"/{type_name}") for t in _types(node))


def as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class StructuredDataReader:
    """Typed access to the JSON-LD nodes of one page.

    Example:
        reader = StructuredDataReader(soup)
        product = reader.product()
        if product and product.get("name"):
            ...
    """

    def __init__(self, soup: BeautifulSoup):
        self._nodes = list(self._read_nodes(soup))

    @staticmethod
    def _read_nodes(soup: BeautifulSoup) -> Iterator[Dict[str, Any]]:
        for index, script in enumerate(soup.find_all("script", attrs={"type": "application/ld+json"})):
            content = script.string or script.get_text() or ""
            if not content.strip():
                continue
            try:
                data = json.loads(content)
            except ValueError as e:
                logger.debug("json_ld_block_skipped", block=index, error=str(e))
                continue

            for item in as_list(data):
                if not isinstance(item, dict):
                    continue
                # Flattened @graph form
                if isinstance(item.get("@graph"), list):
                    for node in item["@graph"]:
                        if isinstance(node, dict):
                            yield node
                yield item

    @property
    def nodes(self) -> List[Dict[str, Any]]:
        return list(self._nodes)

    def find(self, type_name: str) -> List[Dict[str, Any]]:
        return [node for node in self._nodes if is_type(node, type_name)]

    def product(self) -> Optional[Dict[str, Any]]:
        """First Product node on the page, if any."""
        products = self.find("Product")
        return products[0] if products else None

    def reviews(self) -> List[Dict[str, Any]]:
        """Review nodes embedded in Product nodes, followed by standalone ones."""
        reviews: List[Dict[str, Any]] = []
        for product in self.find("Product"):
            reviews.extend(r for r in as_list(product.get("review")) if isinstance(r, dict))
            reviews.extend(r for r in as_list(product.get("reviews")) if isinstance(r, dict))
        for review in self.find("Review"):
            if not any(review is r for r in reviews):
                reviews.append(review)
        return reviews

    def item_list_urls(self) -> List[str]:
        """URLs from ItemList nodes (itemListElement url or item.url)."""
        urls = []
        for item_list in self.find("ItemList"):
            for element in as_list(item_list.get("itemListElement")):
                if isinstance(element, str):
                    urls.append(element)
                    continue
                if not isinstance(element, dict):
                    continue
                url = element.get("url")
                item = element.get("item")
                if not url and isinstance(item, dict):
                    url = item.get("url") or item.get("@id")
                elif not url and isinstance(item, str):
                    url = item
                if isinstance(url, str) and url:
                    urls.append(url)
        return urls


def offers_of(product: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Offers normalized to a list, with AggregateOffer expanded."""
    offers: List[Dict[str, Any]] = []
    for offer in as_list(product.get("offers")):
        if not isinstance(offer, dict):
            continue
        offers.append(offer)
        if is_type(offer, "AggregateOffer"):
            offers.extend(o for o in as_list(offer.get("offers")) if isinstance(o, dict))
    return offers


def offer_price(offer: Dict[str, Any]) -> Any:
    """Raw price value of an offer (price, lowPrice or priceSpecification.price)."""
    for key in ("price", "lowPrice"):
        if offer.get(key) not in (None, ""):
            return offer[key]
    for spec in as_list(offer.get("priceSpecification")):
        if isinstance(spec, dict) and spec.get("price") not in (None, ""):
            return spec["price"]
    return None


def availability_in_stock(offer: Dict[str, Any]) -> Optional[bool]:
    """Map schema.org availability to a stock flag; None when absent."""
    availability = offer.get("availability")
    if not availability:
        return None
    value = str(availability).rsplit("/", 1)[-1].lower()
    return value in ("instock", "limitedavailability", "onlineonly", "instoreonly", "presale")


def text_value(value: Any) -> Optional[str]:
    """Plain string from a JSON-LD value that may be a dict with a name."""
    if isinstance(value, dict):
        value = value.get("name") or value.get("@value")
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or isinstance(value, (dict, list)):
        return None
    text = " ".join(str(value).split())
    return text or None


def image_urls(product: Dict[str, Any]) -> List[str]:
    urls = []
    for image in as_list(product.get("image")):
        if isinstance(image, dict):
            image = image.get("url") or image.get("contentUrl")
        if isinstance(image, str) and image.strip():
            urls.append(image.strip())
    return urls


def barcode_of(product: Optional[Dict[str, Any]]) -> Optional[str]:
    """Barcode from GTIN fields, identifier, productID, then offers."""
    if not product:
        return None

    for name in GTIN_FIELDS:
        barcode = normalize_barcode(product.get(name))
        if barcode:
            return barcode

    for identifier in as_list(product.get("identifier")):
        if isinstance(identifier, dict):
            value = identifier.get("value") or identifier.get("@value")
            kind = str(identifier.get("propertyID") or identifier.get("@type") or "").lower()
            if kind and not any(t in kind for t in _IDENTIFIER_TYPES) and kind != "propertyvalue":
                continue
        else:
            value = identifier
        barcode = normalize_barcode(value)
        if barcode:
            return barcode

    barcode = normalize_barcode(product.get("productID"))
    if barcode:
        return barcode

    for offer in offers_of(product):
        for name in GTIN_FIELDS:
            barcode = normalize_barcode(offer.get(name))
            if barcode:
                return barcode

    return None
