"""Asda Groceries."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)


PROFILE = RetailerProfile(
    slug="asda",
    name="Asda",
    domains=("groceries.asda.com",),
    product_url_patterns=(r"/product/(?:[a-z0-9-]+/)?\d+(?:[/?]|$)",),
    listing_url_pattern=r"/(?:aisle|shelf|search|super-department)/",
    external_id_patterns=(r"/product/(?:[a-z0-9-]+/)?(\d+)",),
    listing=ListingRules(
        link_selectors=(
            'a[href*="/product/"]',
            '[data-auto-id="linkProductDetail"]',
            ".co-product__anchor",
            ".product-tile a",
            ".co-item a",
        ),
        inline_id_url_template="https://groceries.asda.com/product/{id}",
        inline_id_patterns=(r'"(?:productId|skuId)"\s*:\s*"?(\d{6,})"?',),
        supports_pagination=False,
        strip_query=True,
    ),
    details=DetailsSelectors(
        title=(
            'h1[data-auto-id="pdp-product-title"]',
            ".pdp-main-details__title",
            '[data-testid="product-title"]',
            ".co-product__title",
            "h1.product-title",
            "h1",
        ),
        price=(
            '[data-auto-id="pdp-price"] strong',
            ".pdp-main-details__price strong",
            ".co-product__price strong",
            '[data-testid="product-price"]',
            ".product-price .price",
            ".rollback-price",
            ".sale-price",
            ".offer-price",
            ".price strong",
            ".price",
        ),
        original_price=(
            '[data-auto-id="pdp-was-price"]',
            ".pdp-main-details__was-price",
            ".was-price",
            ".price-was",
            ".original-price",
            "s.price",
            "del.price",
            ".price-strikethrough",
        ),
        loyalty_price=(
            '[data-auto-id="asda-rewards-price"]',
            ".asda-rewards-price",
            ".rewards-price",
            ".loyalty-price",
        ),
        offer=('[data-auto-id="rollback-price"]', ".rollback"),
        description=(
            '[data-auto-id="pdp-description"]',
            ".pdp-description__content",
            ".product-description",
            ".co-product__description",
            "#product-description",
        ),
        images=(
            '[data-auto-id="pdp-image"] img',
            ".pdp-image-carousel img",
            ".product-image img",
            ".co-product__image img",
            ".gallery-image img",
        ),
        brand=(
            '[data-auto-id="pdp-brand"]',
            ".pdp-main-details__brand",
            ".product-brand",
            ".co-product__brand",
            ".brand-name",
        ),
        weight=(
            '[data-auto-id="pdp-weight"]',
            ".pdp-main-details__weight",
            ".product-weight",
            ".product-size",
        ),
        out_of_stock=(
            '[data-auto-id="out-of-stock"]',
            ".out-of-stock",
            ".unavailable",
            ".sold-out",
        ),
        external_id=("[data-product-id]", "[data-sku-id]", "[data-item-id]"),
        external_id_attrs=("data-product-id", "data-sku-id", "data-item-id"),
        ingredients=(
            '[data-auto-id="pdp-ingredients"]',
            ".pdp-description__ingredients",
            ".ingredients",
            ".product-ingredients",
        ),
        breadcrumbs=('[data-auto-id="breadcrumb"] a', ".breadcrumb a", ".breadcrumbs a"),
        rating=('[data-auto-id="pdp-rating"]', ".product-rating", ".star-rating"),
        review_count=('[data-auto-id="pdp-review-count"]', ".review-count", ".reviews-count"),
    ),
    reviews=ReviewSelectors(
        container=(
            '[data-auto-id="review"]',
            ".review-item",
            ".customer-review",
            ".product-review",
            '[data-testid="review"]',
        ),
        rating=('[data-auto-id="review-rating"]', ".review-rating", ".star-rating", ".rating"),
        body=('[data-auto-id="review-body"]', ".review-body", ".review-text", ".review-content"),
        title=('[data-auto-id="review-title"]', ".review-title", ".review-headline"),
        author=('[data-auto-id="review-author"]', ".review-author", ".reviewer-name", ".author-name"),
        date=('[data-auto-id="review-date"]', ".review-date"),
        verified=('[data-auto-id="verified-purchase"]', ".verified-purchase", ".verified-badge"),
        helpful=('[data-auto-id="helpful-count"]', ".helpful-count", ".vote-count"),
    ),
    starting_urls=(
        "https://groceries.asda.com/aisle/pet-shop/dog/dog-food",
        "https://groceries.asda.com/aisle/pet-shop/dog/dog-food/dry-dog-food",
        "https://groceries.asda.com/aisle/pet-shop/dog/dog-food/wet-dog-food",
        "https://groceries.asda.com/aisle/pet-shop/dog/dog-food/puppy-food",
        "https://groceries.asda.com/aisle/pet-shop/dog/dog-treats",
    ),
    headers={"Cache-Control": "no-cache", "Pragma": "no-cache"},
)
