"""Ocado."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)


PROFILE = RetailerProfile(
    slug="ocado",
    name="Ocado",
    domains=("ocado.com",),
    product_url_patterns=(r"/products/[a-z0-9-]+-\d+$",),
    listing_url_pattern=r"/(?:browse|search)(?:/|\?|$)",
    external_id_patterns=(r"/products/[a-z0-9-]+-(\d+)$",),
    listing=ListingRules(
        link_selectors=(
            'a[href*="/products/"]',
            ".fop-contentWrapper a",
            '[data-sku] a',
            ".product-card a",
        ),
        inline_url_patterns=(r'"(/products/[a-z0-9-]+-\d+)"',),
        next_page_selectors=(
            'a[rel="next"]',
            '[data-test="pagination-next"]',
            ".pagination__next a",
            ".pagination-next a",
            "a.next",
        ),
        strip_query=True,
    ),
    details=DetailsSelectors(
        title=("h1.fop-title", ".bop-title h1", '[data-test="product-title"]', "h1"),
        price=(
            ".fop-price",
            ".bop-price__current",
            '[data-test="product-price"]',
            ".price",
        ),
        original_price=(".fop-price-was", ".bop-price__old", ".was-price"),
        offer=(".fop-row-promo", ".promotion-offer", ".bop-promotion"),
        description=(".bop-info__content", ".fop-description", ".product-description"),
        images=(".fop-images img", ".bop-gallery img", ".product-image img"),
        brand=(".fop-brand", ".bop-brand", '[data-test="product-brand"]'),
        weight=(".fop-catch-weight", ".bop-catchWeight", ".pack-size"),
        out_of_stock=(".fop-out-of-stock", ".out-of-stock", ".unavailable"),
        external_id=("[data-sku]", "[data-product-id]"),
        external_id_attrs=("data-sku", "data-product-id"),
        ingredients=(".fop-ingredients", ".bop-ingredients", ".ingredients"),
        breadcrumbs=(".bop-breadcrumbs a", ".breadcrumb a"),
    ),
    reviews=ReviewSelectors(
        container=('[data-testid="review-item"]', ".fop-review", ".review-item"),
        rating=(".fop-review-rating", '[data-testid="review-rating"]', ".review-rating"),
        body=(".fop-review-text", '[data-testid="review-text"]', ".review-text"),
        title=(".fop-review-title", '[data-testid="review-title"]', ".review-title"),
        author=(".fop-review-author", '[data-testid="review-author"]', ".review-author"),
        date=(".fop-review-date", '[data-testid="review-date"]', ".review-date"),
        verified=(".fop-review-verified", ".verified-purchase"),
        helpful=(".fop-review-helpful", ".helpful-count"),
    ),
    starting_urls=(
        "https://www.ocado.com/browse/pets-20974/dog-111797/dog-food-111800",
        "https://www.ocado.com/browse/pets-20974/dog-111797/dog-treats-111801",
        "https://www.ocado.com/browse/pets-20974/dog-111797/puppy-food-111802",
    ),
    headers={
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    },
)
