"""Field normalizers for prices, weights, quantities, barcodes and URLs.

Every function here is total: bad input resolves to None instead of raising,
so extractors can call them on raw page text without guarding.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Optional, Pattern, Sequence
from urllib.parse import parse_qsl, urlencode, urljoin, urlparse, urlunparse


# ---------------------------------------------------------------------------
# Prices
# ---------------------------------------------------------------------------

CURRENCY_SYMBOLS = {
    "GBP": "£",
    "EUR": "€",
    "USD": "$",
}

_PENCE_RE = re.compile(r"^(\d+)\s*p$", re.IGNORECASE)
_POUNDS_RE = re.compile(r"^(\d+)(?:\.(\d{1,2}))?$")
_THOUSANDS_RE = re.compile(r"^\d{1,3}(?:,\d{3})+$")
_THOUSANDS_WEIGHT_RE = re.compile(r"^\d{1,3}(?:,\d{3})+(?:\.\d+)?$")
_PLAIN_DECIMAL_RE = re.compile(r"^\d+(?:\.\d+)?$")

# Candidates tried in order when a price is buried in surrounding text
_EMBEDDED_PRICE_PATTERNS = (
    re.compile(r"[£$€]\s*\d[\d,]*(?:[.,]\d{1,2})?"),
    re.compile(r"\b\d+\s*p\b", re.IGNORECASE),
    re.compile(r"\b\d[\d,]*\.\d{2}\b"),
)


def parse_price(text: Any) -> Optional[int]:
    """Parse a price string into minor currency units (pence).

    Handles:
    - "99p" -> 99 (pence returned as-is)
    - "£12.99" -> 1299
    - "£12.9" -> 1290
    - "12,99" -> 1299 (comma decimal)
    - "£1,299.00" -> 129900 (thousands separator)
    - "12" -> 1200 (whole pounds)

    Args:
        text: Raw price text

    Returns:
        Integer minor units, or None if the text is not a price
    """
    if text is None or isinstance(text, bool):
        return None
    cleaned = str(text).strip()
    if not cleaned:
        return None

    pence = _PENCE_RE.match(cleaned)
    if pence:
        return int(pence.group(1))

    cleaned = re.sub(r"[£$€\s]", "", cleaned)
    cleaned = re.sub(r"^(?:GBP|EUR|USD)", "", cleaned, flags=re.IGNORECASE)

    if "," in cleaned:
        if "." in cleaned or _THOUSANDS_RE.match(cleaned):
            cleaned = cleaned.replace(",", "")
        else:
            cleaned = cleaned.replace(",", ".")

    match = _POUNDS_RE.match(cleaned)
    if not match:
        return None

    pounds, fraction = match.groups()
    return int(pounds) * 100 + int((fraction or "0").ljust(2, "0"))


def format_price(minor_units: int, currency: str = "GBP") -> str:
    """Format minor units for display, e.g. 1299 -> "£12.99"."""
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), "")
    return f"{symbol}{minor_units // 100}.{minor_units % 100:02d}"


def extract_price_from_text(text: Optional[str]) -> Optional[int]:
    """Extract the first price-like token from free text.

    Useful for element text such as "Now £3.50 each" or "Was £4.00".

    Args:
        text: Text containing price information

    Returns:
        Minor units of the first positive price found, or None
    """
    if not text:
        return None

    direct = parse_price(text)
    if direct is not None:
        return direct

    for pattern in _EMBEDDED_PRICE_PATTERNS:
        for match in pattern.finditer(text):
            price = parse_price(match.group(0))
            if price:
                return price

    return None


def price_from_structured(value: Any) -> Optional[int]:
    """Convert a structured-data price (number or string) to minor units.

    JSON-LD prices are decimal amounts ("5.50", 5.5, "12"), so they are
    scaled by 100 with half-up rounding rather than read as pence.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        amount = _to_decimal(str(value))
    else:
        text = str(value).strip()
        if _PLAIN_DECIMAL_RE.match(text):
            amount = _to_decimal(text)
        else:
            return parse_price(text)

    if amount is None or amount < 0:
        return None
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _to_decimal(text: str) -> Optional[Decimal]:
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


# ---------------------------------------------------------------------------
# Weights and quantities
# ---------------------------------------------------------------------------

# Volume units are treated as mass-equivalent grams
WEIGHT_UNIT_FACTORS = {
    "kg": 1000,
    "kilogram": 1000,
    "kilograms": 1000,
    "g": 1,
    "gram": 1,
    "grams": 1,
    "ml": 1,
    "millilitre": 1,
    "millilitres": 1,
    "milliliter": 1,
    "milliliters": 1,
    "l": 1000,
    "ltr": 1000,
    "litre": 1000,
    "litres": 1000,
    "liter": 1000,
    "liters": 1000,
    "lb": 454,
    "lbs": 454,
    "pound": 454,
    "pounds": 454,
    "oz": 28,
    "ounce": 28,
    "ounces": 28,
}

_WEIGHT_RE = re.compile(
    r"(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:[.,]\d+)?)\s*"
    r"(kg|kilograms?|g|grams?|ml|millilitres?|milliliters?|l|ltr|litres?|liters?"
    r"|lb|lbs|pounds?|oz|ounces?)\b",
    re.IGNORECASE,
)

DEFAULT_QUANTITY_PATTERNS: Sequence[Pattern] = (
    re.compile(r"(\d+)\s*(?:pack|count|pcs|pieces)\b", re.IGNORECASE),
    re.compile(r"(\d+)\s*x\s*\d+", re.IGNORECASE),
    re.compile(r"\bpack\s+of\s+(\d+)\b", re.IGNORECASE),
)


def parse_weight(text: Optional[str]) -> Optional[int]:
    """Find the first weight or volume in text and convert it to grams.

    Examples: "Dog Food 2.6kg" -> 2600, "5 lb" -> 2270, "500ml" -> 500.

    Args:
        text: Any text that may contain a weight, such as a product title

    Returns:
        Weight in grams, or None when no unit token is present
    """
    if not text:
        return None

    match = _WEIGHT_RE.search(text)
    if not match:
        return None

    raw = match.group(1)
    if _THOUSANDS_WEIGHT_RE.match(raw):
        raw = raw.replace(",", "")
    else:
        raw = raw.replace(",", ".")
    amount = _to_decimal(raw)
    factor = WEIGHT_UNIT_FACTORS.get(match.group(2).lower())
    if amount is None or factor is None:
        return None

    grams = int((amount * factor).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return grams if grams > 0 else None


def parse_quantity(
    text: Optional[str], patterns: Iterable[Pattern] = DEFAULT_QUANTITY_PATTERNS
) -> Optional[int]:
    """Extract a pack quantity ("12 pack", "6 x 400g"). First pattern to match wins."""
    if not text:
        return None

    for pattern in patterns:
        match = pattern.search(text)
        if match:
            quantity = int(match.group(1))
            return quantity if quantity > 0 else None

    return None


# ---------------------------------------------------------------------------
# Barcodes
# ---------------------------------------------------------------------------

VALID_BARCODE_LENGTHS = frozenset({8, 12, 13, 14})  # EAN-8, UPC-A, EAN-13, GTIN-14


def normalize_barcode(value: Any) -> Optional[str]:
    """Strip non-digits and keep the result only if it is a valid GTIN length."""
    if value is None or isinstance(value, bool):
        return None

    digits = re.sub(r"\D", "", str(value))
    if len(digits) not in VALID_BARCODE_LENGTHS:
        return None
    return digits


# ---------------------------------------------------------------------------
# Text and URLs
# ---------------------------------------------------------------------------

TRACKING_PARAMS = frozenset(
    {
        "fbclid",
        "gclid",
        "msclkid",
        "mc_cid",
        "mc_eid",
        "ref",
        "ref_",
    }
)
TRACKING_PARAM_PREFIXES = ("utm_",)

_INVALID_HREF_PREFIXES = ("javascript:", "mailto:", "tel:", "data:")


def clean_text(text: Optional[str]) -> Optional[str]:
    """Collapse whitespace; empty strings become None."""
    if text is None:
        return None
    cleaned = re.sub(r"\s+", " ", str(text)).strip()
    return cleaned or None


def is_tracking_param(name: str) -> bool:
    lowered = name.lower()
    return lowered in TRACKING_PARAMS or lowered.startswith(TRACKING_PARAM_PREFIXES)


def canonicalize_url(url: str) -> str:
    """Normalize a URL for use as a dedup key.

    Lower-cases scheme and host, drops the fragment and removes tracking
    parameters (utm_*, fbclid, gclid, ...). Other query parameters are kept
    in their original order.

    Args:
        url: Absolute URL

    Returns:
        Canonical URL
    """
    if not url:
        return url

    try:
        parsed = urlparse(url.strip())
    except ValueError:
        # Malformed authority (e.g. an unclosed IPv6 bracket): keep as is
        return url.strip()
    query = [
        (key, value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if not is_tracking_param(key)
    ]

    return urlunparse(
        (
            parsed.scheme.lower(),
            parsed.netloc.lower(),
            parsed.path or "/",
            parsed.params,
            urlencode(query),
            "",
        )
    )


def absolutize_url(href: Optional[str], base_url: str) -> Optional[str]:
    """Resolve an href found on a page against that page's URL.

    Absolute URLs are returned unchanged, "//host/x" takes the page scheme,
    "/x" resolves against the page host and "x" against the page directory.
    Script, mail and fragment-only links, and hrefs that cannot be parsed,
    resolve to None.
    """
    if not href:
        return None

    href = href.strip()
    if not href or href.startswith("#") or href.lower().startswith(_INVALID_HREF_PREFIXES):
        return None

    try:
        return urljoin(base_url, href)
    except ValueError:
        return None


def url_host(url: str) -> str:
    """Lower-cased host of a URL without a leading "www."."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""
    return host[4:] if host.startswith("www.") else host


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------

_RATING_OUT_OF_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*(?:out\s+of|/)\s*(\d+)", re.IGNORECASE)
_RATING_PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*%")
_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")

_DAY_MONTH_YEAR_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)?\s+([A-Za-z]{3,9})\.?,?\s+(\d{4})\b")
_MONTH_DAY_YEAR_RE = re.compile(r"\b([A-Za-z]{3,9})\.?\s+(\d{1,2})(?:st|nd|rd|th)?,?\s+(\d{4})\b")
_ISO_DATE_RE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})")
_SLASH_DATE_RE = re.compile(r"\b(\d{1,2})[/.](\d{1,2})[/.](\d{4})\b")


def parse_rating(text: Any, max_rating: int = 5) -> Optional[float]:
    """Normalize a rating to the 0-5 scale.

    Handles "4.0 out of 5 stars", "8/10", "80%" and bare numbers on the
    given scale.

    Returns:
        Rating in (0, 5], or None when no valid rating is present
    """
    if text is None or isinstance(text, bool):
        return None
    text = str(text).strip()
    if not text:
        return None

    out_of = _RATING_OUT_OF_RE.search(text)
    percent = _RATING_PERCENT_RE.search(text)
    if out_of:
        value = _to_decimal(out_of.group(1).replace(",", "."))
        scale = int(out_of.group(2))
    elif percent:
        value = _to_decimal(percent.group(1))
        scale = 100
    else:
        number = _NUMBER_RE.search(text)
        if not number:
            return None
        value = _to_decimal(number.group(0).replace(",", "."))
        scale = max_rating

    if value is None or scale <= 0 or value > scale:
        return None

    rating = round(float(value) * 5 / scale, 2)
    return rating if 0 < rating <= 5 else None


def parse_review_date(text: Any) -> Optional[date]:
    """Find a date in review text.

    Accepts ISO dates, "5 January 2024", "January 5, 2024" and UK-style
    "05/01/2024", including inside longer text such as
    "Reviewed in the United Kingdom on 5 January 2024".
    """
    if text is None:
        return None
    text = str(text).strip()
    if not text:
        return None

    iso = _ISO_DATE_RE.search(text)
    if iso:
        return _safe_date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))

    for pattern, order in ((_DAY_MONTH_YEAR_RE, "dmy"), (_MONTH_DAY_YEAR_RE, "mdy")):
        match = pattern.search(text)
        if not match:
            continue
        if order == "dmy":
            day, month_name, year = match.groups()
        else:
            month_name, day, year = match.groups()
        month = _month_number(month_name)
        if month:
            parsed = _safe_date(int(year), month, int(day))
            if parsed:
                return parsed

    slash = _SLASH_DATE_RE.search(text)
    if slash:
        return _safe_date(int(slash.group(3)), int(slash.group(2)), int(slash.group(1)))

    return None


def _month_number(name: str) -> Optional[int]:
    for fmt in ("%B", "%b"):
        try:
            return datetime.strptime(name[:3] if fmt == "%b" else name, fmt).month
        except ValueError:
            continue
    return None


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_count(text: Any) -> int:
    """First integer in text ("12 people found this helpful" -> 12), else 0.

    "One person found this helpful" counts as 1.
    """
    if text is None:
        return 0
    text = str(text)
    digits = re.search(r"\d[\d,]*", text)
    if digits:
        return int(digits.group(0).replace(",", ""))
    if re.search(r"\bone\b", text, re.IGNORECASE):
        return 1
    return 0
