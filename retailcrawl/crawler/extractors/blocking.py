"""Detection of anti-bot interstitials and access-denied pages."""

from typing import Iterable, Optional

from bs4 import BeautifulSoup


BLOCK_MARKERS = ("captcha", "robot check", "access denied", "blocked")
BLOCK_TITLE_MARKERS = ("sorry", "robot", "blocked", "captcha", "access denied")


def is_blocked_page(
    html: str, soup: Optional[BeautifulSoup] = None, extra_markers: Iterable[str] = ()
) -> bool:
    """Check whether a fetched page is a block page instead of real content.

    Args:
        html: Raw page HTML
        soup: Already-parsed document, to avoid parsing twice
        extra_markers: Retailer-specific markers searched in the raw HTML

    Returns:
        True if the page should be treated as blocked
    """
    if not html:
        return False

    lowered = html.lower()
    for marker in (*BLOCK_MARKERS, *extra_markers):
        if marker and marker.lower() in lowered:
            return True

    if soup is None:
        soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text() if soup.title else ""
    title = title.lower()
    return any(marker in title for marker in BLOCK_TITLE_MARKERS)
