"""Amazon UK.

Product pages are keyed by ASIN, which is also the listing dedup key: the
same product appears under many URL shapes (/dp/, /gp/product/, /gp/aw/d/)
and all of them collapse to https://www.amazon.co.uk/dp/{ASIN}.
"""

import re

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)
from retailcrawl.crawler.utils.category import CategoryRule
from retailcrawl.crawler.utils.normalizer import DEFAULT_QUANTITY_PATTERNS


ASIN_PATTERNS = (
    r"/dp/([A-Z0-9]{10})(?:[/?]|$)",
    r"/gp/product/([A-Z0-9]{10})(?:[/?]|$)",
    r"/gp/aw/d/([A-Z0-9]{10})(?:[/?]|$)",
)

PROFILE = RetailerProfile(
    slug="amazon-uk",
    name="Amazon UK",
    domains=("amazon.co.uk",),
    product_url_patterns=ASIN_PATTERNS,
    listing_url_pattern=r"^/s(?:\?|/)|^/b(?:/|\?)",
    natural_key_patterns=ASIN_PATTERNS,
    canonical_url_template="https://www.amazon.co.uk/dp/{key}",
    listing=ListingRules(
        link_selectors=(
            'a[href*="/dp/"]',
            'a[href*="/gp/product/"]',
            'a[href*="/gp/aw/d/"]',
        ),
        supports_pagination=False,
    ),
    details=DetailsSelectors(
        title=(
            "#productTitle",
            "#title span",
            "h1.a-size-large",
            'h1[data-automation-id="title"]',
            "#titleSection #title",
            "h1",
        ),
        price=(
            ".priceToPay .a-offscreen",
            "#corePrice_feature_div .a-price .a-offscreen",
            "#corePriceDisplay_desktop_feature_div .a-price .a-offscreen",
            "#priceblock_ourprice",
            "#priceblock_dealprice",
            "#priceblock_saleprice",
            ".a-price .a-offscreen",
            'span[data-a-color="price"] .a-offscreen',
        ),
        original_price=(
            ".basisPrice .a-offscreen",
            'span[data-a-strike="true"] .a-offscreen',
            ".a-text-strike .a-offscreen",
            "#listPrice",
            "#priceblock_listprice",
            "#rrp .a-offscreen",
        ),
        loyalty_price=(
            "#sns-base-price",
            "#subscriptionPrice",
            ".sns-price .a-offscreen",
        ),
        offer=(
            "#dealBadge_feature_div",
            ".dealBadge",
            ".a-badge-deal",
        ),
        description=(
            "#productDescription",
            "#feature-bullets ul",
            "#feature-bullets",
            "#aplus_feature_div",
            '[data-feature-name="productDescription"]',
        ),
        images=(
            "#imgTagWrapperId img",
            "#landingImage",
            "#main-image",
            ".imgTagWrapper img",
            "#imageBlock img",
        ),
        image_attrs=("data-old-hires", "src", "data-src"),
        brand=(
            "#bylineInfo",
            ".po-brand .a-span9",
            "#brand",
            '[data-feature-name="bylineInfo"]',
        ),
        brand_prefixes=("visit the ", "brand: ", "brand:"),
        brand_suffixes=(" store",),
        weight=(
            "#variation_size_name .selection",
            "#twister_feature_div .selection",
        ),
        availability=("#availability", "#availability span"),
        out_of_stock=("#outOfStock",),
        external_id=("[data-asin]",),
        external_id_attrs=("data-asin",),
        ingredients=(
            "#important-information",
            ".ingredients",
            '[data-feature-name="ingredients"]',
        ),
        breadcrumbs=(
            "#wayfinding-breadcrumbs_feature_div a",
            ".a-breadcrumb a",
        ),
        rating=("#acrPopover", ".a-icon-star .a-icon-alt"),
        review_count=("#acrCustomerReviewText", "#acrCustomerReviewLink"),
    ),
    reviews=ReviewSelectors(
        container=(
            '[data-hook="review"]',
            "#cm-cr-dp-review-list .review",
            "#customer_review_foreign .review",
            ".review",
        ),
        rating=(
            '[data-hook="review-star-rating"] .a-icon-alt',
            '[data-hook="cmps-review-star-rating"] .a-icon-alt',
            ".review-rating .a-icon-alt",
            'i[data-hook="review-star-rating"]',
            '[class*="a-star-"]',
        ),
        body=(
            '[data-hook="review-body"] span',
            ".review-text-content span",
            ".review-text span",
            ".review-body",
        ),
        title=(
            '[data-hook="review-title"] span:not(.a-icon-alt)',
            ".review-title-content span",
            ".review-title span",
        ),
        author=(
            '[data-hook="review-author"] .a-profile-name',
            ".a-profile-name",
            ".author",
        ),
        date=('[data-hook="review-date"]', ".review-date"),
        verified=('[data-hook="avp-badge"]', ".avp-badge"),
        helpful=('[data-hook="helpful-vote-statement"]', ".cr-vote-text"),
        id_prefixes=("customer_review-", "review-"),
    ),
    category_rules=(
        CategoryRule(r"\b(dog|puppy|kitten|cat)\s*(food|treats?|snacks?)", query_param="k"),
        CategoryRule(r"/(Pet[^/]*|Dog[^/]*|Cat[^/]*)/", dashes_to_spaces=True),
    ),
    quantity_patterns=(
        re.compile(r"(\d+)\s*(?:pack|count|pcs|pieces|tins|pouches|sachets|bags)\b", re.IGNORECASE),
        *DEFAULT_QUANTITY_PATTERNS[1:],
    ),
    block_markers=(
        "type the characters you see in this image",
        "api-services-support@amazon.com",
    ),
    starting_urls=(
        "https://www.amazon.co.uk/s?k=dog+food&rh=n%3A471382031",
        "https://www.amazon.co.uk/s?k=dry+dog+food&rh=n%3A471384031",
        "https://www.amazon.co.uk/s?k=wet+dog+food&rh=n%3A471386031",
        "https://www.amazon.co.uk/s?k=dog+treats&rh=n%3A471392031",
        "https://www.amazon.co.uk/s?k=puppy+food&rh=n%3A471382031",
    ),
    headers={"Cache-Control": "max-age=0"},
)
