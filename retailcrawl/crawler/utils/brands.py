"""Brand inference from product titles."""

import re
from typing import Iterable, Optional


KNOWN_BRANDS = (
    "Pedigree",
    "Whiskas",
    "Felix",
    "Iams",
    "Royal Canin",
    "Purina",
    "Pro Plan",
    "ProPlan",
    "Harringtons",
    "Bakers",
    "Burns",
    "James Wellbeloved",
    "Lily's Kitchen",
    "Forthglade",
    "Butcher's",
    "Cesar",
    "Webbox",
    "Good Boy",
    "Dreamies",
    "Wagg",
    "Naturo",
    "AVA",
    "Applaws",
    "Canagan",
    "Orijen",
    "Acana",
    "Hill's",
    "Hills",
    "Eukanuba",
    "Arden Grange",
    "Barking Heads",
    "Canidae",
    "Taste of the Wild",
    "Wellness",
    "Blue Buffalo",
    "Nature's Menu",
    "Natures Menu",
    "Encore",
    "Thrive",
    "Scrumbles",
    "Edgard & Cooper",
    "Pooch & Mutt",
    "Winalot",
    "Chappie",
    "Adventuros",
    "Dentalife",
    "Dentastix",
    "Frolic",
    "Markus Muhle",
    "Pero",
)

BRAND_SKIP_WORDS = frozenset(
    {
        "the",
        "a",
        "an",
        "new",
        "best",
        "premium",
        "deluxe",
        "original",
        "natural",
        "organic",
        "pack",
        "size",
        "dog",
        "cat",
        "pet",
        "puppy",
        "kitten",
        "adult",
        "senior",
        "food",
        "treats",
        "dry",
        "wet",
        "complete",
    }
)


def looks_like_brand(word: str, skip_words: Iterable[str] = BRAND_SKIP_WORDS) -> bool:
    """A brand word is capitalised, longer than one character and not a skip word."""
    skip = {w.lower() for w in skip_words}
    return len(word) > 1 and word[0].isupper() and word.lower() not in skip


def brand_from_title(
    title: Optional[str],
    known_brands: Iterable[str] = KNOWN_BRANDS,
    skip_words: Iterable[str] = BRAND_SKIP_WORDS,
) -> Optional[str]:
    """Guess a brand from a product title.

    Known brands are matched first (longest name first, whole words only).
    Otherwise the leading one or two capitalised words are used, provided
    they are not generic words like "Premium" or "Dog".

    Args:
        title: Product title
        known_brands: Brand names to look for anywhere in the title
        skip_words: Lower-case words that never start a brand

    Returns:
        Brand name or None
    """
    if not title:
        return None

    for brand in sorted(known_brands, key=len, reverse=True):
        if re.search(rf"(?<!\w){re.escape(brand)}(?!\w)", title, re.IGNORECASE):
            return brand

    skip_words = frozenset(w.lower() for w in skip_words)
    words = title.split()
    if len(words) < 2 or not looks_like_brand(words[0], skip_words):
        return None

    if len(words) > 2 and looks_like_brand(words[1], skip_words):
        return f"{words[0]} {words[1]}"
    return words[0]
