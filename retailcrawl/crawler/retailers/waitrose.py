"""Waitrose & Partners. Reviews are served by BazaarVoice."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)
from retailcrawl.crawler.utils.category import CategoryRule


PROFILE = RetailerProfile(
    slug="waitrose",
    name="Waitrose",
    domains=("waitrose.com",),
    product_url_patterns=(r"/ecom/products/[a-z0-9-]+/[a-z0-9-]+",),
    listing_url_pattern=r"/ecom/shop/(?:browse|search)",
    external_id_patterns=(r"/ecom/products/[a-z0-9-]+/([a-z0-9-]+)",),
    listing=ListingRules(
        link_selectors=(
            'a[href*="/ecom/products/"]',
            '[data-test="product-pod"] a',
            ".productPod a",
        ),
        next_page_selectors=(
            'a[rel="next"]',
            '[data-test="pagination-next"]',
            '[aria-label="Next page"]',
            ".pagination-next a",
        ),
        strip_query=True,
    ),
    details=DetailsSelectors(
        title=('[data-test="product-name"]', "h1.productName", "h1"),
        price=('[data-test="product-price"]', ".productPrice", ".price"),
        original_price=('[data-test="was-price"]', ".wasPrice", ".was-price"),
        loyalty_price=('[data-test="mywaitrose-price"]', ".myWaitrosePrice"),
        offer=('[data-test="offer-description"]', ".offerDescription", ".promotion"),
        description=('[data-test="product-description"]', ".productDescription", "#productDescription"),
        images=('[data-test="product-image"] img', ".productImage img", ".product-image img"),
        brand=('[data-test="product-brand"]', ".productBrand"),
        weight=('[data-test="product-size"]', ".productSize", ".pack-size"),
        out_of_stock=('[data-test="out-of-stock"]', ".outOfStock", ".out-of-stock"),
        ingredients=('[data-test="ingredients"]', ".ingredients"),
        breadcrumbs=('[data-test="breadcrumbs"] a', ".breadcrumbs a"),
    ),
    reviews=ReviewSelectors(
        container=(".bv-content-review", '[data-test="review"]', ".review-item"),
        rating=(".bv-rating-ratio-number", ".bv-rating-stars-container", ".review-rating"),
        rating_attrs=("content", "aria-label", "title", "data-rating"),
        body=(".bv-content-summary-body-text", '[data-test="review-text"]', ".review-text"),
        title=(".bv-content-title", '[data-test="review-title"]', ".review-title"),
        author=(".bv-author", '[data-test="review-author"]', ".review-author"),
        date=(".bv-content-datetime meta", ".bv-content-datetime", ".review-date"),
        verified=(".bv-badge-verifiedPurchaser", ".verified-purchase"),
        helpful=(".bv-content-btn-feedback-yes .bv-content-btn-count", ".helpful-count"),
        id_attrs=("data-content-id", "data-review-id", "id"),
    ),
    category_rules=(CategoryRule(r"/pet/dog/([\w_]+)", joiner="_"),),
    starting_urls=(
        "https://www.waitrose.com/ecom/shop/browse/groceries/pet/dog/dog_food",
        "https://www.waitrose.com/ecom/shop/browse/groceries/pet/dog/dog_treats",
        "https://www.waitrose.com/ecom/shop/browse/groceries/pet/dog/puppy_food",
    ),
)
