"""Selector-chain resolution over parsed HTML.

A selector chain is an ordered list of CSS selectors, most specific first.
Each candidate is evaluated on its own: a selector that is invalid or
raises is logged and skipped without affecting the remaining candidates.
"""

import re
from typing import Callable, Iterable, List, Optional, Sequence

import structlog
from bs4 import BeautifulSoup, Tag


logger = structlog.get_logger(__name__)

Accept = Callable[[Tag], bool]

_NUMBER_RE = re.compile(r"\d")


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def try_select(node: Tag, selector: str, context: str = "") -> Optional[List[Tag]]:
    """Evaluate one selector.

    Returns:
        Matching elements (possibly empty), or None when the selector itself
        failed to evaluate
    """
    try:
        return node.select(selector)
    except Exception as e:
        logger.debug("selector_error", selector=selector, context=context, error=str(e))
        return None


def select_first(
    node: Tag,
    selectors: Sequence[str],
    context: str = "",
    accept: Optional[Accept] = None,
) -> Optional[Tag]:
    """Return the first element of the first selector whose match is accepted.

    Args:
        node: Document or element to search within
        selectors: Candidate selectors in preference order
        context: Field name used in miss logs (e.g. "title")
        accept: Optional predicate the matched element must satisfy

    Returns:
        Matching element, or None when every candidate missed
    """
    for selector in selectors:
        matches = try_select(node, selector, context)
        if not matches:
            if matches is not None:
                logger.debug("selector_miss", selector=selector, context=context)
            continue

        element = matches[0]
        if accept is not None and not _accepts(accept, element, selector, context):
            logger.debug("selector_rejected", selector=selector, context=context)
            continue
        return element

    return None


def select_all(node: Tag, selectors: Sequence[str], context: str = "") -> List[Tag]:
    """Return every match of the first selector that matches anything."""
    for selector in selectors:
        matches = try_select(node, selector, context)
        if matches:
            return matches
        if matches is not None:
            logger.debug("selector_miss", selector=selector, context=context)
    return []


def select_union(node: Tag, selectors: Sequence[str], context: str = "") -> List[Tag]:
    """Return matches of all selectors in order, each element at most once."""
    seen = set()
    results = []
    for selector in selectors:
        matches = try_select(node, selector, context)
        if not matches:
            if matches is not None:
                logger.debug("selector_miss", selector=selector, context=context)
            continue
        for element in matches:
            if id(element) not in seen:
                seen.add(id(element))
                results.append(element)
    return results


def _accepts(accept: Accept, element: Tag, selector: str, context: str) -> bool:
    try:
        return bool(accept(element))
    except Exception as e:
        logger.debug("selector_accept_error", selector=selector, context=context, error=str(e))
        return False


def element_text(element: Optional[Tag]) -> Optional[str]:
    """Whitespace-normalized text of an element, or None when empty."""
    if element is None:
        return None
    text = " ".join(element.get_text(" ", strip=True).split())
    return text or None


def first_attr(element: Optional[Tag], attrs: Iterable[str]) -> Optional[str]:
    """Value of the first non-empty attribute among `attrs`."""
    if element is None:
        return None
    for attr in attrs:
        value = element.get(attr)
        if isinstance(value, list):
            value = " ".join(value)
        if value and str(value).strip():
            return str(value).strip()
    return None


def select_text(
    node: Tag, selectors: Sequence[str], context: str = "", accept: Optional[Accept] = None
) -> Optional[str]:
    """Text of the first selector match that has non-empty text."""

    def has_text(element: Tag) -> bool:
        return element_text(element) is not None and (accept is None or accept(element))

    return element_text(select_first(node, selectors, context, accept=has_text))


def has_text(element: Tag) -> bool:
    return element_text(element) is not None


def has_digits(element: Tag) -> bool:
    return bool(_NUMBER_RE.search(element.get_text() or ""))
