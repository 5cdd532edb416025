"""B&M Stores."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
)
from retailcrawl.crawler.utils.category import CategoryRule


PROFILE = RetailerProfile(
    slug="bm",
    name="B&M",
    domains=("bmstores.co.uk",),
    product_url_patterns=(r"/product/", r"/p/\d+", r"/pd/[a-z0-9-]+"),
    external_id_patterns=(r"/p/(\d+)", r"/pd/([a-z0-9-]+)", r"/product/(?:[a-z0-9-]+-)?(\d+)"),
    listing=ListingRules(supports_pagination=False),
    details=DetailsSelectors(
        title=(
            "h1.product-title",
            "h1[data-product-title]",
            ".product-name h1",
            ".pdp-title h1",
            '[data-testid="product-title"]',
            ".product-details h1",
            "h1",
        ),
        price=(
            ".product-price",
            "[data-price]",
            ".price-current",
            ".pdp-price",
            ".price .current",
            '[data-testid="product-price"]',
            ".product-details .price",
            ".price",
        ),
        original_price=(
            ".was-price",
            ".price-was",
            ".original-price",
            ".price-rrp",
            "[data-original-price]",
            ".price .was",
            ".strikethrough-price",
            "s.price",
            "del.price",
        ),
        description=(
            ".product-description",
            "[data-description]",
            ".description-content",
            ".pdp-description",
            '[data-testid="product-description"]',
            "#product-description",
        ),
        images=(
            ".product-image img",
            ".gallery img",
            "[data-product-image]",
            ".pdp-image img",
            ".product-gallery img",
            ".carousel img",
        ),
        brand=(".product-brand", "[data-brand]", ".brand-name", '[data-testid="product-brand"]', ".pdp-brand"),
        weight=(".product-weight", "[data-weight]", ".weight", ".size"),
        out_of_stock=(
            ".out-of-stock",
            '[data-stock-status="out"]',
            ".sold-out",
            ".unavailable",
        ),
        external_id=("[data-product-id]", "[data-sku]", "[data-item-id]"),
        external_id_attrs=("data-product-id", "data-sku", "data-item-id"),
    ),
    category_rules=(
        CategoryRule(r"/pets?/(?:[^/]+/)*?(dog|puppy|cat|kitten)[-/](food|treats)(?:/|$|\?)"),
        CategoryRule(r"/((?:pet|dog|cat|puppy)[^/]*)/?(?:\?|$)"),
    ),
    starting_urls=(
        "https://www.bmstores.co.uk/pets/dog-food",
        "https://www.bmstores.co.uk/pets/dog-treats",
        "https://www.bmstores.co.uk/pets/puppy-food",
        "https://www.bmstores.co.uk/pets",
    ),
)
