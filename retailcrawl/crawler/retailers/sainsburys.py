"""Sainsbury's Groceries.

Product grids are client-rendered, so listing pages are read both from
anchors and from product URLs embedded in the page's inline JSON. Reviews
are served by BazaarVoice.
"""

from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)


PROFILE = RetailerProfile(
    slug="sainsburys",
    name="Sainsbury's",
    domains=("sainsburys.co.uk",),
    product_url_patterns=(
        r"/gol-ui/product/[a-z0-9-]+",
        r"/shop/gb/groceries/product/details/[a-z0-9-]+",
        r"/product/[a-z0-9-]+--\d+",
    ),
    listing_url_pattern=r"/gol-ui/(?:groceries|SearchResults)|/shop/gb/groceries/",
    external_id_patterns=(r"--(\d+)(?:[/?]|$)", r"/product/(?:details/)?([a-z0-9-]+)"),
    listing=ListingRules(
        link_selectors=(
            'a[href*="/gol-ui/product/"]',
            'a[href*="/product/"]',
            '[data-test-id="product-tile"] a',
            ".pt__link",
            ".productNameAndPromotions a",
        ),
        link_attrs=("href", "data-product-url"),
        inline_url_patterns=(
            r'"url"\s*:\s*"([^"]*/product\\?/[^"]+)"',
            r'data-product-url="([^"]+)"',
        ),
        next_page_selectors=(
            'a[rel="next"]',
            '[data-test-id="pagination-next"]',
            ".ln-c-pagination__link--next",
            ".pagination .next a",
        ),
        page_number_selectors=(".ln-c-pagination__item a", ".pagination a"),
        strip_query=True,
    ),
    details=DetailsSelectors(
        title=(
            '[data-test-id="pd-product-title"]',
            "h1.pd__header",
            ".productTitleDescriptionContainer h1",
            "h1",
        ),
        price=(
            '[data-test-id="pd-retail-price"]',
            ".pd__cost__retail-price",
            ".pricePerUnit",
            ".price",
        ),
        original_price=(
            '[data-test-id="pd-was-price"]',
            ".pd__cost__was-price",
            ".was-price",
        ),
        loyalty_price=(
            '[data-test-id="pd-nectar-price"]',
            ".pd__cost--nectar",
            ".nectar-price",
        ),
        offer=('[data-test-id="pd-offer"]', ".pd__promotion", ".promotion"),
        description=(
            '[data-test-id="pd-description"]',
            ".pd__description",
            ".productText",
            "#information",
        ),
        images=(
            '[data-test-id="pd-selected-image"]',
            ".pd__image img",
            ".productImage img",
        ),
        brand=('[data-test-id="pd-brand"]', ".pd__brand", ".product-brand"),
        weight=('[data-test-id="pd-unit-size"]', ".pd__unit-size", ".product-weight"),
        out_of_stock=('[data-test-id="pd-out-of-stock"]', ".pd__out-of-stock", ".out-of-stock"),
        ingredients=('[data-test-id="pd-ingredients"]', ".pd__ingredients", ".ingredients"),
        breadcrumbs=(".ln-c-breadcrumbs a", '[data-test-id="breadcrumbs"] a', ".breadcrumb a"),
    ),
    reviews=ReviewSelectors(
        container=(".bv-content-review", '[data-test-id="review"]', ".review-item"),
        rating=(".bv-rating-ratio-number", ".bv-rating-stars-container", ".review-rating"),
        rating_attrs=("content", "aria-label", "title", "data-rating"),
        body=(".bv-content-summary-body-text", '[data-test-id="review-text"]', ".review-text"),
        title=(".bv-content-title", '[data-test-id="review-title"]', ".review-title"),
        author=(".bv-author", '[data-test-id="review-author"]', ".review-author"),
        date=(".bv-content-datetime meta", ".bv-content-datetime", ".review-date"),
        verified=(".bv-badge-verifiedPurchaser", ".verified-purchase"),
        helpful=(".bv-content-btn-feedback-yes .bv-content-btn-count", ".helpful-count"),
        id_attrs=("data-content-id", "data-review-id", "id"),
    ),
    starting_urls=(
        "https://www.sainsburys.co.uk/gol-ui/groceries/pets/dog-food-and-treats/dog-food/c:1019916",
        "https://www.sainsburys.co.uk/gol-ui/groceries/pets/dog-food-and-treats/dry-dog-food/c:1019918",
        "https://www.sainsburys.co.uk/gol-ui/groceries/pets/dog-food-and-treats/wet-dog-food/c:1019919",
        "https://www.sainsburys.co.uk/gol-ui/groceries/pets/dog-food-and-treats/dog-treats/c:1019917",
    ),
)
