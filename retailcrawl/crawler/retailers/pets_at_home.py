"""Pets at Home."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
)
from retailcrawl.crawler.utils.category import CategoryRule


PROFILE = RetailerProfile(
    slug="pets-at-home",
    name="Pets at Home",
    domains=("petsathome.com",),
    product_url_patterns=(r"/product/[a-z0-9-]+/[A-Z0-9]+$",),
    external_id_patterns=(r"/product/[a-z0-9-]+/([A-Z0-9]+)$",),
    listing=ListingRules(
        link_selectors=(
            'a[href*="/product/"]',
            '[data-testid="product-card"] a',
            ".product-tile a",
        ),
        strip_query=True,
    ),
    details=DetailsSelectors(
        title=('h1[data-testid="product-title"]', "h1.product-title", ".product-name h1", "h1"),
        price=(
            '[data-testid="product-price"]',
            ".product-price",
            ".price-current",
            ".price",
        ),
        original_price=('[data-testid="was-price"]', ".price-rrp", ".was-price", ".price-was"),
        loyalty_price=('[data-testid="vip-price"]', ".vip-price"),
        offer=('[data-testid="promotion"]', ".promotion-message"),
        description=(
            '[data-testid="product-description"]',
            ".product-description",
            "#product-description",
        ),
        images=('[data-testid="product-image"] img', ".product-gallery img", ".product-image img"),
        brand=('[data-testid="product-brand"]', ".product-brand", ".brand-name"),
        weight=('[data-testid="product-size"]', ".product-size", ".product-weight"),
        ingredients=('[data-testid="ingredients"]', ".ingredients", "#ingredients"),
    ),
    category_rules=(
        CategoryRule(r"(dog|cat|puppy|kitten)-(food|treats|accessories)"),
        CategoryRule(r"/(dog|cat|puppy|kitten)/(food|treats|accessories)(?:/|$)"),
    ),
    starting_urls=(
        "https://www.petsathome.com/shop/en/pets/dog/dog-food",
        "https://www.petsathome.com/shop/en/pets/dog/dog-food/dry-dog-food",
        "https://www.petsathome.com/shop/en/pets/dog/dog-food/wet-dog-food",
        "https://www.petsathome.com/shop/en/pets/dog/dog-treats",
        "https://www.petsathome.com/shop/en/pets/dog/puppy-food",
    ),
)
