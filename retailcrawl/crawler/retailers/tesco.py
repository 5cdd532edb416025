"""Tesco Groceries."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)
from retailcrawl.crawler.utils.category import CategoryRule


PROFILE = RetailerProfile(
    slug="tesco",
    name="Tesco",
    domains=("tesco.com",),
    product_url_patterns=(r"/groceries/en-GB/products/\d+",),
    listing_url_pattern=r"/groceries/en-GB/(?:shop|search|promotions)",
    external_id_patterns=(r"/products/(\d+)",),
    listing=ListingRules(
        link_selectors=(
            'a[href*="/groceries/en-GB/products/"]',
            '[data-auto="product-tile"] a',
            ".product-tile a",
        ),
        inline_id_url_template="https://www.tesco.com/groceries/en-GB/products/{id}",
        inline_id_patterns=(r'"(?:tpnc|productId)"\s*:\s*"?(\d{6,})"?',),
        supports_pagination=False,
        strip_query=True,
    ),
    details=DetailsSelectors(
        title=(
            'h1[data-auto="product-title"]',
            ".product-details-tile__title",
            "h1.product-title",
            "h1",
        ),
        price=(
            '[data-auto="price-value"]',
            ".price-control-wrapper .value",
            ".beans-price__text",
            ".price",
        ),
        original_price=('[data-auto="was-price"]', ".price-was", ".was-price"),
        loyalty_price=(
            '[data-auto="clubcard-price-value"]',
            ".offer-text--clubcard",
            ".clubcard-price",
        ),
        offer=('[data-auto="offer-text"]', ".offer-text", ".promotions-list"),
        description=(
            '[data-auto="product-description"]',
            "#product-description",
            ".product-info-block--marketing",
        ),
        images=(
            '[data-auto="product-image"] img',
            ".product-image__container img",
            ".product-image img",
        ),
        brand=('[data-auto="product-brand"]', ".product-brand"),
        weight=('[data-auto="pack-size"]', ".product-info-block--net-contents", ".pack-size"),
        out_of_stock=('[data-auto="product-unavailable"]', ".product-info-message--unavailable", ".out-of-stock"),
        ingredients=('[data-auto="ingredients"]', "#ingredients", ".product-info-block--ingredients"),
        breadcrumbs=('[data-auto="breadcrumb"] a', ".breadcrumbs a"),
    ),
    reviews=ReviewSelectors(
        container=('[data-auto="review"]', ".review", ".review-item"),
        rating=('[data-auto="review-rating"]', ".star-rating", ".review-rating"),
        body=('[data-auto="review-text"]', ".review__text", ".review-text"),
        title=('[data-auto="review-title"]', ".review__title", ".review-title"),
        author=('[data-auto="review-author"]', ".review__author", ".review-author"),
        date=('[data-auto="review-date"]', ".review__date", ".review-date"),
        verified=('[data-auto="verified-buyer"]', ".verified-buyer"),
        helpful=('[data-auto="review-helpful"]', ".helpful-count"),
    ),
    category_rules=(CategoryRule(r"/shop/pets?/([\w-]+)"),),
    starting_urls=(
        "https://www.tesco.com/groceries/en-GB/shop/pets/dog-food-and-treats/all",
        "https://www.tesco.com/groceries/en-GB/shop/pets/dog-food-and-treats/dry-dog-food",
        "https://www.tesco.com/groceries/en-GB/shop/pets/dog-food-and-treats/wet-dog-food",
        "https://www.tesco.com/groceries/en-GB/shop/pets/dog-food-and-treats/dog-treats",
    ),
)
