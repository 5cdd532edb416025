"""Next-page discovery for listing pages."""

import re
from typing import Optional, Sequence
from urllib.parse import parse_qs, urlparse

from bs4 import Tag

from retailcrawl.crawler.extractors.selectors import element_text, try_select
from retailcrawl.crawler.utils.normalizer import absolutize_url


DEFAULT_NEXT_PAGE_SELECTORS = (
    'a[rel="next"]',
    'a[aria-label*="Next"]',
    'a[aria-label*="next"]',
    'a[aria-label="Go to next page"]',
    ".pagination-next a",
    ".pagination__next a",
    "a.next",
    "a.pagination-link--next",
    '[class*="pagination"] a[class*="next"]',
    'nav[aria-label*="pagination"] a[class*="next"]',
)

DEFAULT_PAGE_NUMBER_SELECTORS = (
    ".pagination a",
    '[class*="pagination"] a',
    'nav[aria-label*="pagination"] a',
    ".pager a",
    '[class*="pager"] a',
)

# Items per page assumed when a listing paginates with ?start=N
START_PARAM_PAGE_SIZE = 24

_INVALID_LINK_MARKERS = ("javascript:", "void(0)")

_PAGE_PATTERNS = (
    re.compile(r"[?&]page=(\d+)", re.IGNORECASE),
    re.compile(r"/page/(\d+)", re.IGNORECASE),
    re.compile(r"/p/(\d+)", re.IGNORECASE),
)
_START_PATTERN = re.compile(r"[?&]start=(\d+)", re.IGNORECASE)


def is_invalid_pagination_link(href: str) -> bool:
    """Script links and same-page anchors; a fragment after a real path is fine."""
    lowered = href.strip().lower()
    if not lowered or lowered.startswith("#"):
        return True
    return any(marker in lowered for marker in _INVALID_LINK_MARKERS)


def current_page_number(url: str) -> int:
    """Page number encoded in a listing URL, 1 when none is present."""
    for pattern in _PAGE_PATTERNS:
        match = pattern.search(url)
        if match:
            return max(1, int(match.group(1)))

    match = _START_PATTERN.search(url)
    if match:
        return int(match.group(1)) // START_PARAM_PAGE_SIZE + 1

    return 1


def next_page_number(next_url: str, current_url: str) -> int:
    """Page number of the next URL: its page= parameter, else current + 1."""
    values = parse_qs(urlparse(next_url).query).get("page")
    if values and values[0].isdigit() and int(values[0]) >= 1:
        return int(values[0])
    return current_page_number(current_url) + 1


def find_next_page_url(
    soup: Tag,
    current_url: str,
    next_selectors: Sequence[str] = DEFAULT_NEXT_PAGE_SELECTORS,
    page_number_selectors: Sequence[str] = DEFAULT_PAGE_NUMBER_SELECTORS,
) -> Optional[str]:
    """Find the absolute URL of the next listing page.

    Tries explicit "next" links first, then a pagination link whose text is
    the next page number.

    Args:
        soup: Parsed listing page
        current_url: URL of the listing page
        next_selectors: Selectors for "next" links, in preference order
        page_number_selectors: Selectors for numbered pagination links

    Returns:
        Absolute next-page URL, or None on the last page
    """
    for selector in next_selectors:
        matches = try_select(soup, selector, "pagination")
        if not matches:
            continue
        href = matches[0].get("href")
        if href and not is_invalid_pagination_link(href):
            url = absolutize_url(href, current_url)
            if url:
                return url

    wanted = str(current_page_number(current_url) + 1)
    for selector in page_number_selectors:
        for link in try_select(soup, selector, "pagination") or []:
            if element_text(link) != wanted:
                continue
            href = link.get("href")
            if href and not is_invalid_pagination_link(href):
                url = absolutize_url(href, current_url)
                if url:
                    return url

    return None
