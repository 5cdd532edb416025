"""zooplus UK."""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)


PROFILE = RetailerProfile(
    slug="zooplus",
    name="zooplus",
    domains=("zooplus.co.uk",),
    product_url_patterns=(r"/shop/dogs/[a-z0-9_/]+/[a-z0-9-]+_\d{4,}",),
    listing_url_pattern=r"/shop/",
    external_id_patterns=(r"_(\d{4,})(?:[/?#]|$)",),
    listing=ListingRules(
        link_selectors=(
            '[data-zta="product-link"]',
            'a[href*="/shop/dogs/"]',
            ".product-card a",
        ),
        supports_pagination=False,
        strip_query=True,
    ),
    details=DetailsSelectors(
        title=('[data-zta="productTitle"]', "h1.product__title", "h1"),
        price=('[data-zta="productPriceAmount"]', ".product__price", ".price"),
        original_price=('[data-zta="productPriceWas"]', ".product__price--was", ".was-price"),
        offer=('[data-zta="productSavings"]', ".product__savings"),
        description=('[data-zta="productDescription"]', ".product__description", "#description"),
        images=('[data-zta="productImage"] img', ".product__image img", ".product-image img"),
        brand=('[data-zta="productBrand"]', ".product__brand"),
        weight=('[data-zta="productSize"]', ".product__variant--selected", ".product-size"),
        out_of_stock=('[data-zta="outOfStock"]', ".product__availability--out", ".out-of-stock"),
        ingredients=('[data-zta="ingredients"]', ".product__ingredients", ".ingredients"),
        breadcrumbs=('[data-zta="breadcrumb"] a', ".breadcrumb a"),
    ),
    reviews=ReviewSelectors(
        container=('[data-zta="reviewItem"]', ".review-item", ".customer-review"),
        rating=('[data-zta="reviewRating"]', ".review-rating", ".star-rating"),
        body=('[data-zta="reviewBody"]', ".review-body", ".review-text"),
        title=('[data-zta="reviewTitle"]', ".review-title"),
        author=('[data-zta="reviewAuthor"]', ".review-author"),
        date=('[data-zta="reviewDate"]', ".review-date"),
        verified=('[data-zta="verifiedPurchase"]', ".verified-purchase"),
        helpful=('[data-zta="helpfulCount"]', ".helpful-count"),
    ),
    starting_urls=(
        "https://www.zooplus.co.uk/shop/dogs/dry_dog_food",
        "https://www.zooplus.co.uk/shop/dogs/canned_dog_food",
        "https://www.zooplus.co.uk/shop/dogs/dog_treats_chews",
    ),
)
