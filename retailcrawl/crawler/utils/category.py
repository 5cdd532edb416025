"""Category inference from listing URLs, breadcrumbs and product text.

Category heuristics are retailer specific and approximate. Each retailer
carries an ordered table of CategoryRule entries; the first rule that
produces a value wins. GENERIC_CATEGORY_RULES is used for retailers that
do not define their own table.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from urllib.parse import parse_qs, unquote_plus, urlparse


# Ordered most specific first; values are plain-text patterns
CATEGORY_PATTERNS: Dict[str, List[str]] = {
    "dog-food": ["dog-food", "puppy-food"],
    "dog-treats": ["dog-treats", "puppy-treats"],
    "cat-food": ["cat-food", "kitten-food"],
    "cat-treats": ["cat-treats", "kitten-treats"],
    "dog-accessories": ["dog-accessories", "puppy-accessories"],
    "cat-accessories": ["cat-accessories", "kitten-accessories"],
    "dog": ["dog", "puppy"],
    "cat": ["cat", "kitten"],
    "pets": ["pets?"],
}

# Breadcrumb and path segments that never name a category on their own
GENERIC_CATEGORY_TERMS = frozenset(
    {"", "home", "groceries", "shop", "all", "pets", "pet", "products", "browse"}
)

ANIMAL_ALIASES = {"puppy": "dog", "kitten": "cat"}


@dataclass(frozen=True)
class CategoryRule:
    """One row of a category rule table.

    The pattern is searched in the URL, or in a decoded query parameter when
    query_param is set. Non-empty groups are joined with `joiner`.

    Attributes:
        pattern: Regex with one or more capture groups
        query_param: Apply to this query parameter's value instead of the URL
        joiner: String placed between captured groups
        lower: Lower-case the result
        dashes_to_spaces: Replace "-" with " " in the result
        aliases: Per-group value substitutions (e.g. puppy -> dog)
    """

    pattern: str
    query_param: Optional[str] = None
    joiner: str = "-"
    lower: bool = True
    dashes_to_spaces: bool = False
    aliases: Mapping[str, str] = field(default_factory=dict)

    def apply(self, url: str) -> Optional[str]:
        subject = url
        if self.query_param:
            values = parse_qs(urlparse(url).query).get(self.query_param)
            if not values:
                return None
            subject = unquote_plus(values[0]).strip()
            if not subject:
                return None

        match = re.search(self.pattern, subject, re.IGNORECASE)
        if not match:
            return None

        parts = []
        for group in match.groups() or (match.group(0),):
            if not group:
                continue
            value = group.lower() if self.lower else group
            parts.append(self.aliases.get(value, value))

        if not parts:
            return None

        result = self.joiner.join(parts)
        if self.dashes_to_spaces:
            result = result.replace("-", " ")
        return result


# Segment of a path that is not generic and not purely numeric
_MEANINGFUL_SEGMENT = r"((?!(?:all|shop|pets?|groceries|browse)(?:[/?]|$))[a-z][a-z-]*[a-z])"

GENERIC_CATEGORY_RULES: Sequence[CategoryRule] = (
    # /aisle/pet-shop/dog/dog-food/all -> "dog food"
    CategoryRule(
        rf"/aisle/(?:[^/?]+/)*{_MEANINGFUL_SEGMENT}(?:/(?:all|[\d-]+))*/?(?:\?|$)",
        dashes_to_spaces=True,
    ),
    CategoryRule(r"/shelf/([^/?]+)", dashes_to_spaces=True),
    CategoryRule(r"/super-department/([^/?]+)", dashes_to_spaces=True),
    CategoryRule(r"/search/([^/?]+)", lower=False),
    CategoryRule(r"/gol-ui/[^/]+/([\w-]+)", dashes_to_spaces=True),
    CategoryRule(
        r"/browse/.*?/(dog-food|dog-treats|puppy-food|puppy-treats|cat-food|cat-treats)(?:-\d+)?(?:/|$)"
    ),
    CategoryRule(r"/(dog|puppy|cat|kitten)/(food|treats)(?:/|$)", aliases=ANIMAL_ALIASES),
    CategoryRule(
        r"/pets?/(?:[^/]+/)*?(dog|puppy|cat|kitten)[-/](food|treats)(?:/|$|\?)",
        aliases=ANIMAL_ALIASES,
    ),
)


def apply_category_rules(url: str, rules: Iterable[CategoryRule]) -> Optional[str]:
    """Return the value of the first rule that matches the URL."""
    for rule in rules:
        category = rule.apply(url)
        if category:
            return category
    return None


def category_from_url(url: str, rules: Optional[Iterable[CategoryRule]] = None) -> Optional[str]:
    """Infer a category slug from a listing or product URL.

    Tries the given rules (or GENERIC_CATEGORY_RULES), then a /pets/<segment>
    lookup against CATEGORY_PATTERNS, then any CATEGORY_PATTERNS match in the
    URL.
    """
    if not url:
        return None

    category = apply_category_rules(url, GENERIC_CATEGORY_RULES if rules is None else rules)
    if category:
        return category

    pets_segment = re.search(r"/pets?/([\w-]+)", url, re.IGNORECASE)
    if pets_segment:
        segment = pets_segment.group(1)
        for slug, patterns in CATEGORY_PATTERNS.items():
            if any(re.fullmatch(p, segment, re.IGNORECASE) for p in patterns):
                return slug
        return segment.replace("-", " ")

    return CategoryClassifier.classify(url)


def category_from_breadcrumbs(crumbs: Sequence[str], depth_from_end: int = 1) -> Optional[str]:
    """Pick a category from breadcrumb texts.

    Uses the crumb `depth_from_end` places before the last one (the last
    crumb is usually the product itself), falling back to the last crumb when
    that one is generic.
    """
    crumbs = [c.strip() for c in crumbs if c and c.strip()]
    if len(crumbs) < 2:
        return None

    index = max(0, len(crumbs) - 1 - depth_from_end)
    category = crumbs[index]
    if _is_generic(category) and index < len(crumbs) - 1:
        category = crumbs[-1]

    return None if _is_generic(category) else category


def _is_generic(term: str) -> bool:
    return term.strip().lower() in GENERIC_CATEGORY_TERMS


class CategoryClassifier:
    """Keyword-based category classification for free text.

    Used as the last resort when neither the URL structure nor breadcrumbs
    give a category.
    """

    @staticmethod
    def classify(text: str) -> Optional[str]:
        """Return the first CATEGORY_PATTERNS slug whose pattern occurs in text.

        Args:
            text: Product title, search query or URL

        Returns:
            Category slug (e.g., "dog-food") or None
        """
        if not text:
            return None

        for slug, patterns in CATEGORY_PATTERNS.items():
            for pattern in patterns:
                if re.search(rf"(?<![a-z]){pattern}(?![a-z])", text, re.IGNORECASE):
                    return slug
        return None
