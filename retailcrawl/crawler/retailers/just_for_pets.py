"""Just For Pets (WooCommerce storefront)."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)


PROFILE = RetailerProfile(
    slug="just-for-pets",
    name="Just For Pets",
    domains=("justforpetsonline.co.uk",),
    product_url_patterns=(
        r"/products?/[a-z0-9-]+",
        r"/p/\d+",
        r"-p-\d+\.html",
        r"[a-z0-9-]+-\d+\.html$",
        r"^/[a-z0-9-]+/[a-z0-9-]+\.html$",
    ),
    external_id_patterns=(
        r"/p/(\d+)",
        r"-p-(\d+)\.html",
        r"-(\d+)\.html$",
        r"/products?/([a-z0-9-]+)",
    ),
    listing=ListingRules(
        link_selectors=(
            ".product a[href]",
            ".products a[href]",
            ".woocommerce-LoopProduct-link",
            "a[href]",
        ),
        next_page_selectors=(
            "a.next.page-numbers",
            ".woocommerce-pagination a.next",
            'a[rel="next"]',
            "a.next",
        ),
        page_number_selectors=(".woocommerce-pagination a", ".page-numbers a", ".pagination a"),
    ),
    details=DetailsSelectors(
        title=(
            'h1[data-testid="product-title"]',
            "h1.product-title",
            "h1.product_title",
            ".product-name h1",
            ".product-detail h1",
            ".product-info h1",
            '[itemprop="name"]',
            "h1",
        ),
        price=(
            '[data-testid="product-price"]',
            ".product-price",
            ".price-current",
            ".current-price",
            "[data-price]",
            '[itemprop="price"]',
            ".price ins .amount",
            ".price .amount",
            ".woocommerce-Price-amount",
            ".price",
        ),
        original_price=(
            ".was-price",
            ".price-was",
            ".original-price",
            ".price-rrp",
            "[data-original-price]",
            ".price del .amount",
            "del .woocommerce-Price-amount",
            ".old-price",
            ".regular-price del",
        ),
        description=(
            '[data-testid="product-description"]',
            ".product-description",
            ".description-content",
            "#product-description",
            '[itemprop="description"]',
            ".woocommerce-product-details__short-description",
            "#tab-description",
        ),
        images=(
            ".woocommerce-product-gallery img",
            ".product-image img",
            ".gallery img",
            "[data-product-image]",
            ".product-gallery img",
            ".product-main-image img",
            'img[itemprop="image"]',
        ),
        image_attrs=("data-large_image", "data-src", "src"),
        brand=(
            '[data-testid="product-brand"]',
            ".product-brand",
            ".brand-name",
            "[data-brand]",
            'a[href*="/brands/"]',
            'a[href*="/brand/"]',
            '[itemprop="brand"]',
            ".manufacturer",
        ),
        weight=(
            ".product-weight",
            "[data-weight]",
            ".variation-size",
            '[itemprop="weight"]',
            ".woocommerce-product-attributes-item--weight td",
        ),
        availability=(".stock", ".availability"),
        out_of_stock=(".stock.out-of-stock", ".out-of-stock", '[data-stock-status="out"]', ".sold-out"),
        external_id=("[data-product-id]", "[data-product_id]", "[data-id]", "[data-item-id]"),
        external_id_attrs=("data-product-id", "data-product_id", "data-id", "data-item-id"),
        ingredients=(
            ".ingredients",
            "[data-ingredients]",
            ".product-ingredients",
            "#ingredients",
            ".composition",
            ".ingredient-list",
            "#tab-description .ingredients",
        ),
        breadcrumbs=(".woocommerce-breadcrumb a", ".breadcrumb a", ".breadcrumbs a"),
    ),
    reviews=ReviewSelectors(
        container=(
            ".woocommerce-Reviews .review",
            "#reviews .review",
            ".comment-review",
            ".review-item",
            ".customer-review",
            ".product-review",
            '[itemtype*="Review"]',
        ),
        rating=(".star-rating", "[data-rating]", "[data-score]", ".review-rating", ".rating"),
        rating_attrs=("aria-label", "title", "data-rating", "data-score", "content"),
        body=(".description", ".comment-text p", ".review-body", ".review-text", '[itemprop="reviewBody"]'),
        author=(".woocommerce-review__author", ".comment-author", ".review-author", '[itemprop="author"]'),
        title=(".review-title", ".review-headline"),
        date=(".woocommerce-review__published-date", "time", ".comment-date", ".review-date"),
        verified=(".woocommerce-review__verified", ".verified-purchase", ".verified"),
        id_prefixes=("li-comment-", "comment-", "review-"),
    ),
    starting_urls=(
        "https://www.justforpetsonline.co.uk/dog/dog-food/",
        "https://www.justforpetsonline.co.uk/dog/dog-food/dry-dog-food/",
        "https://www.justforpetsonline.co.uk/dog/dog-food/wet-dog-food/",
        "https://www.justforpetsonline.co.uk/dog/dog-treats/",
        "https://www.justforpetsonline.co.uk/dog/puppy/",
    ),
)
