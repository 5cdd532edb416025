"""Morrisons Groceries."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)
from retailcrawl.crawler.utils.category import CategoryRule


PROFILE = RetailerProfile(
    slug="morrisons",
    name="Morrisons",
    domains=("groceries.morrisons.com",),
    product_url_patterns=(r"/products/[\w-]+/\w+",),
    listing_url_pattern=r"/(?:browse|search|categories)(?:/|\?|$)",
    external_id_patterns=(r"/products/[\w-]+/(\w+)",),
    listing=ListingRules(
        link_selectors=(
            'a[href*="/products/"]',
            '[data-test="product-tile"] a',
            ".fop-item a",
            ".product-card a",
        ),
        supports_pagination=False,
        strip_query=True,
    ),
    details=DetailsSelectors(
        title=(
            'h1[data-test="product-title"]',
            ".bop-title h1",
            ".product-title",
            "h1",
        ),
        price=(
            '[data-test="product-price"]',
            ".bop-price__current",
            ".product-price",
            ".price",
        ),
        original_price=(
            '[data-test="was-price"]',
            ".bop-price__old",
            ".was-price",
            ".price-was",
        ),
        loyalty_price=(
            '[data-test="my-morrisons-price"]',
            ".my-morrisons-price",
            ".loyalty-price",
        ),
        offer=('[data-test="promotion"]', ".bop-promotion", ".promotion"),
        description=(
            '[data-test="product-description"]',
            ".bop-info__description",
            ".product-description",
        ),
        images=('[data-test="product-image"] img', ".bop-gallery img", ".product-image img"),
        brand=('[data-test="product-brand"]', ".bop-brand", ".product-brand"),
        weight=('[data-test="product-weight"]', ".bop-catchWeight", ".product-weight", ".pack-size"),
        out_of_stock=('[data-test="out-of-stock"]', ".out-of-stock", ".unavailable"),
        ingredients=('[data-test="product-ingredients"]', ".bop-ingredients", ".ingredients"),
        breadcrumbs=('[data-test="breadcrumb"] a', ".breadcrumb a"),
    ),
    reviews=ReviewSelectors(
        container=('[data-test="review"]', ".review-item", ".customer-review"),
        rating=('[data-test="review-rating"]', ".review-rating", ".star-rating"),
        body=('[data-test="review-text"]', ".review-text", ".review-body"),
        title=('[data-test="review-title"]', ".review-title"),
        author=('[data-test="review-author"]', ".review-author"),
        date=('[data-test="review-date"]', ".review-date"),
        verified=('[data-test="verified-purchase"]', ".verified-purchase"),
        helpful=('[data-test="helpful-count"]', ".helpful-count"),
    ),
    category_rules=(CategoryRule(r"/browse/pet/([\w-]+)"),),
    starting_urls=(
        "https://groceries.morrisons.com/browse/pet/dog",
        "https://groceries.morrisons.com/browse/pet/dog/dog-food",
        "https://groceries.morrisons.com/browse/pet/dog/dog-treats",
    ),
    headers={"Cache-Control": "no-cache", "Pragma": "no-cache"},
)
