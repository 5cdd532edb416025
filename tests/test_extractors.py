"""Tests for the listing, details and reviews extractors."""

import json
from datetime import date
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from retailcrawl.crawler.base import (
    ListingUrlRecord,
    PaginationToken,
    ProductDetailsRecord,
    ReviewRecord,
    SOURCE_DOM,
    SOURCE_STRUCTURED_DATA,
)
from retailcrawl.crawler.extractors.details import ProductDetailsExtractor
from retailcrawl.crawler.extractors.listing import ListingUrlExtractor
from retailcrawl.crawler.extractors.reviews import ProductReviewsExtractor
from retailcrawl.crawler.retailers import amazon, asda, just_for_pets, sainsburys, tesco


PRODUCT_URL = "https://shop.example/product/widget-1"


def page(body: str, title: str = "Test Shop") -> str:
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


def json_ld(data) -> str:
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


# ============================================================================
# LISTING PAGES
# ============================================================================

class TestListingUrlExtractor:
    """Test product link discovery on listing pages."""

    def test_amazon_asin_dedup_and_canonical_urls(self):
        """Test every ASIN URL shape collapses to one canonical record."""
        html = page(
            '<div class="s-result-item">'
            '<a href="/Pedigree-Adult-Dog-Food/dp/B00ABCDEF1/ref=sr_1_1?keywords=dog">Pedigree</a></div>'
            '<div class="s-result-item"><a href="/gp/product/B00ABCDEF1?utm_source=x">Again</a></div>'
            '<div><a href="https://www.amazon.co.uk/dp/B00XYZ1234">Other</a></div>'
            '<a href="/help/contact">Help</a>',
            title="Amazon.co.uk : dog food",
        )
        url = "https://www.amazon.co.uk/s?k=dog+food"
        extractor = ListingUrlExtractor(amazon.PROFILE)

        assert extractor.can_handle(url)
        records = list(extractor.extract(html, url))

        assert [r.url for r in records] == [
            "https://www.amazon.co.uk/dp/B00ABCDEF1",
            "https://www.amazon.co.uk/dp/B00XYZ1234",
        ]
        assert all(isinstance(r, ListingUrlRecord) for r in records)
        assert records[0].metadata["natural_key"] == "B00ABCDEF1"
        assert records[0].metadata["discovered_from"] == url
        assert records[0].category == "dog-food"

    def test_pagination_token_is_last(self):
        """Test the WooCommerce next link becomes a trailing token."""
        html = page(
            '<ul class="products">'
            '<li class="product"><a class="woocommerce-LoopProduct-link" '
            'href="/product/pedigree-adult-chicken/">Pedigree</a></li>'
            '<li class="product"><a href="https://www.justforpetsonline.co.uk/product/harringtons-lamb/'
            '?utm_campaign=x">Harringtons</a></li>'
            '<li><a href="/dog/">Dog</a></li>'
            "</ul>"
            '<nav class="woocommerce-pagination">'
            '<a class="next page-numbers" href="/dog/dog-food/page/2/">Next</a></nav>'
        )
        url = "https://www.justforpetsonline.co.uk/dog/dog-food/"
        records = list(ListingUrlExtractor(just_for_pets.PROFILE).extract(html, url))

        assert [r.url for r in records[:-1]] == [
            "https://www.justforpetsonline.co.uk/product/pedigree-adult-chicken/",
            "https://www.justforpetsonline.co.uk/product/harringtons-lamb/",
        ]
        token = records[-1]
        assert isinstance(token, PaginationToken)
        assert token.url == "https://www.justforpetsonline.co.uk/dog/dog-food/page/2/"
        assert token.page_number == 2
        assert token.discovered_from == url
        assert records[0].category == "dog-food"

    def test_no_token_when_pagination_unsupported(self):
        """Test retailers without pagination never emit tokens."""
        html = page('<a href="/gp/product/B00ABCDEF1">A</a><a rel="next" href="/s?k=dog&page=2">Next</a>')
        records = list(ListingUrlExtractor(amazon.PROFILE).extract(html, "https://www.amazon.co.uk/s?k=dog"))
        assert not any(isinstance(r, PaginationToken) for r in records)

    def test_inline_json_urls(self):
        """Test product URLs embedded in escaped inline JSON."""
        html = page(
            r'<script>window.__DATA__ = {"products":[{"url":"\/gol-ui\/product\/pedigree-vital-12x400g"}]};</script>'
        )
        url = "https://www.sainsburys.co.uk/gol-ui/groceries/pets/dog-food-and-treats/dog-food/c:1019916"
        extractor = ListingUrlExtractor(sainsburys.PROFILE)

        assert extractor.can_handle(url)
        records = list(extractor.extract(html, url))
        assert [r.url for r in records] == [
            "https://www.sainsburys.co.uk/gol-ui/product/pedigree-vital-12x400g"
        ]

    def test_inline_product_ids(self):
        """Test product URLs built from inline product ids."""
        html = page('<script>var state = {"items":[{"productId":"1000383077001"}]};</script>')
        url = "https://groceries.asda.com/aisle/pet-shop/dog/dog-food/all"
        records = list(ListingUrlExtractor(asda.PROFILE).extract(html, url))

        assert [r.url for r in records] == ["https://groceries.asda.com/product/1000383077001"]
        assert records[0].category == "dog food"

    def test_item_list_fallback(self, shop_profile):
        """Test JSON-LD ItemList is used when the DOM has no product links."""
        item_list = {
            "@type": "ItemList",
            "itemListElement": [
                {"@type": "ListItem", "position": 1, "url": "https://shop.example/product/lamb-dinner"},
                {"@type": "ListItem", "position": 2, "url": "https://other.example/product/x"},
            ],
        }
        html = page(json_ld(item_list))
        records = list(ListingUrlExtractor(shop_profile).extract(html, "https://shop.example/c/dog"))

        assert [r.url for r in records] == ["https://shop.example/product/lamb-dinner"]
        assert records[0].metadata["source"] == SOURCE_STRUCTURED_DATA

    def test_can_handle_partitions_urls(self, shop_profile):
        """Test listing and product URLs are told apart."""
        extractor = ListingUrlExtractor(shop_profile)
        assert extractor.can_handle("https://shop.example/c/dog")
        assert not extractor.can_handle(PRODUCT_URL)
        assert not extractor.can_handle("https://other.example/c/dog")

    def test_blocked_page_yields_nothing(self, shop_profile):
        """Test block pages produce no records and a warning."""
        html = page('<p>Please complete the captcha</p><a href="/product/a">A</a>')
        with capture_logs() as logs:
            records = list(ListingUrlExtractor(shop_profile).extract(html, "https://shop.example/c/dog"))

        assert records == []
        assert any(log["event"] == "blocked_page_detected" and log["log_level"] == "warning" for log in logs)

    def test_malformed_href_skipped(self, shop_profile):
        """Test an unparseable href is dropped while valid links on the page survive."""
        html = page('<a href="http://[x/">Broken</a><a href="/product/a">A</a><a href="//[cdn/product/b">B</a>')
        records = list(ListingUrlExtractor(shop_profile).extract(html, "https://shop.example/c/dog"))

        urls = [r.url for r in records if isinstance(r, ListingUrlRecord)]
        assert urls == ["https://shop.example/product/a"]


# ============================================================================
# PRODUCT DETAILS
# ============================================================================

class TestProductDetailsExtractor:
    """Test product details extraction."""

    def test_structured_data_product(self, shop_profile):
        """Test a JSON-LD Product with a string price."""
        product = {"@context": "https://schema.org", "@type": "Product", "name": "X", "offers": {"price": "5.50"}}
        records = list(ProductDetailsExtractor(shop_profile).extract(page(json_ld(product)), PRODUCT_URL))

        assert len(records) == 1
        record = records[0]
        assert isinstance(record, ProductDetailsRecord)
        assert record.title == "X"
        assert record.price_minor_units == 550
        assert record.currency == "GBP"
        assert record.external_id == "widget-1"
        assert record.in_stock is True
        assert record.metadata["source"] == SOURCE_STRUCTURED_DATA
        assert record.metadata["source_url"] == PRODUCT_URL

    def test_dom_only_product(self, shop_profile):
        """Test the DOM chains when there is no structured data."""
        html = page('<h1 class="product-title">X</h1><span class="price">£5.50</span>')
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert record.title == "X"
        assert record.price_minor_units == 550
        assert record.metadata["source"] == SOURCE_DOM

    def test_structured_fields_filled_from_dom(self, shop_profile):
        """Test fields missing from JSON-LD are taken from the DOM."""
        product = {"@type": "Product", "name": "Lamb Dinner", "offers": {"price": 3, "priceCurrency": "eur"}}
        html = page(
            json_ld(product)
            + '<span class="product-brand">Acme</span>'
            + '<div class="product-description">Tasty lamb</div>'
        )
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert record.price_minor_units == 300
        assert record.currency == "EUR"
        assert record.brand == "Acme"
        assert record.description == "Tasty lamb"
        assert record.metadata["source"] == SOURCE_STRUCTURED_DATA

    def test_original_price_and_discount(self, shop_profile):
        """Test original prices are kept only when above the price."""
        html = page('<h1>Acme Biscuits</h1><span class="price">£4.00</span><span class="was-price">Was £5.00</span>')
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert record.price_minor_units == 400
        assert record.original_price_minor_units == 500
        assert record.has_discount()

        html = page('<h1>Acme Biscuits</h1><span class="price">£4.00</span><span class="was-price">£3.00</span>')
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))
        assert record.original_price_minor_units is None

    def test_missing_title_yields_nothing(self, shop_profile):
        """Test pages without a title produce no record."""
        html = page('<span class="price">£4.00</span>')
        with capture_logs() as logs:
            records = list(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert records == []
        assert any(log["event"] == "product_title_missing" for log in logs)

    def test_missing_price_defaults_to_zero(self, shop_profile):
        """Test pages without a price still produce a record."""
        html = page("<h1>Acme Biscuits</h1>")
        with capture_logs() as logs:
            record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert record.price_minor_units == 0
        assert any(log["event"] == "product_price_missing" for log in logs)

    def test_weight_and_quantity_from_title(self, shop_profile):
        """Test weight and pack size parsed from the title."""
        html = page('<h1>Harringtons Complete Dry Dog Food 2kg</h1><span class="price">£6.00</span>')
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert record.weight_grams == 2000
        assert record.quantity == 0
        assert record.brand == "Harringtons"

        html = page('<h1>Acme Wet Food 6 x 400g</h1><span class="price">£6.00</span>')
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))
        assert record.quantity == 6
        assert record.weight_grams == 400

    def test_structured_availability_barcode_and_rating(self, shop_profile):
        """Test stock, GTIN and aggregate rating from JSON-LD."""
        product = {
            "@type": "Product",
            "name": "Lamb Dinner",
            "gtin13": "5010394001816",
            "offers": {"price": "2.00", "availability": "https://schema.org/OutOfStock"},
            "aggregateRating": {"ratingValue": "4.6", "reviewCount": "128"},
        }
        record = next(ProductDetailsExtractor(shop_profile).extract(page(json_ld(product)), PRODUCT_URL))

        assert record.in_stock is False
        assert record.barcode == "5010394001816"
        assert record.metadata["rating_value"] == 4.6
        assert record.metadata["review_count"] == 128

    def test_images_resolved_and_filtered(self, shop_profile):
        """Test image URLs are absolutized, deduplicated and placeholders dropped."""
        product = {
            "@type": "Product",
            "name": "Lamb Dinner",
            "image": ["https://cdn.example/a.jpg", "https://cdn.example/a.jpg"],
            "offers": {"price": "2.00"},
        }
        html = page(
            json_ld(product)
            + '<div class="product-gallery"><img src="/img/b.jpg"><img src="/img/placeholder.png"></div>'
        )
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert record.images == ("https://cdn.example/a.jpg", "https://shop.example/img/b.jpg")

    def test_malformed_image_skipped(self, shop_profile):
        """Test a broken image URL is left out and the record is still produced."""
        product = {
            "@type": "Product",
            "name": "Lamb Dinner",
            "image": "http://[bad/hero.jpg",
            "offers": {"price": "2.00"},
        }
        html = page(
            json_ld(product)
            + '<div class="product-gallery"><img src="http://[bad/i.jpg"><img src="/img/b.jpg"></div>'
        )
        records = list(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert len(records) == 1
        assert records[0].images == ("https://shop.example/img/b.jpg",)

    def test_dom_product_with_only_broken_image(self, shop_profile):
        """Test a DOM-only page whose single image is unparseable."""
        html = page(
            '<h1 class="product-title">X</h1><span class="price">£5.50</span>'
            '<div class="product-gallery"><img src="http://[bad/i.jpg"></div>'
        )
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert record.price_minor_units == 550
        assert record.images == ()

    def test_breadcrumb_category(self, shop_profile):
        """Test category taken from breadcrumbs."""
        html = page(
            '<nav class="breadcrumb"><a href="/">Home</a><a href="/pets">Pets</a>'
            '<a href="/c/dry">Dry Dog Food</a><a href="#">Lamb Dinner</a></nav>'
            '<h1>Lamb Dinner</h1><span class="price">£2.00</span>'
        )
        record = next(ProductDetailsExtractor(shop_profile).extract(html, PRODUCT_URL))
        assert record.category == "Dry Dog Food"

    def test_amazon_dom_page(self):
        """Test the Amazon selector chains and brand cleanup."""
        html = page(
            '<span id="productTitle"> Pedigree Adult Dry Dog Food with Beef 12kg </span>'
            '<div id="corePrice_feature_div"><span class="a-price"><span class="a-offscreen">£24.99</span></span></div>'
            '<span class="basisPrice"><span class="a-offscreen">£32.00</span></span>'
            '<a id="bylineInfo">Visit the Pedigree Store</a>'
            '<div id="availability"><span>In stock</span></div>',
            title="Amazon.co.uk",
        )
        url = "https://www.amazon.co.uk/dp/B00ABCDEF1"
        record = next(ProductDetailsExtractor(amazon.PROFILE).extract(html, url))

        assert record.title == "Pedigree Adult Dry Dog Food with Beef 12kg"
        assert record.external_id == "B00ABCDEF1"
        assert record.price_minor_units == 2499
        assert record.original_price_minor_units == 3200
        assert record.brand == "Pedigree"
        assert record.weight_grams == 12000
        assert record.in_stock is True

    def test_tesco_loyalty_price(self):
        """Test loyalty prices are kept in metadata."""
        html = page(
            '<h1 data-auto="product-title">Acme Dog Biscuits 400g</h1>'
            '<p data-auto="price-value">£2.00</p>'
            '<span data-auto="clubcard-price-value">£1.50 Clubcard Price</span>'
        )
        url = "https://www.tesco.com/groceries/en-GB/products/301234567"
        record = next(ProductDetailsExtractor(tesco.PROFILE).extract(html, url))

        assert record.external_id == "301234567"
        assert record.price_minor_units == 200
        assert record.metadata["loyalty_price_minor_units"] == 150

    def test_amazon_block_marker(self):
        """Test retailer-specific block markers."""
        html = page("<p>Type the characters you see in this image</p>")
        records = list(ProductDetailsExtractor(amazon.PROFILE).extract(html, "https://www.amazon.co.uk/dp/B00ABCDEF1"))
        assert records == []


# ============================================================================
# REVIEWS
# ============================================================================

class TestProductReviewsExtractor:
    """Test review extraction."""

    def test_structured_reviews(self, shop_profile):
        """Test JSON-LD reviews with different rating scales."""
        product = {
            "@type": "Product",
            "name": "Widget",
            "review": [
                {
                    "@type": "Review",
                    "author": {"@type": "Person", "name": "Jo"},
                    "datePublished": "2024-03-15",
                    "reviewBody": "My dog loves it",
                    "name": "Great",
                    "reviewRating": {"@type": "Rating", "ratingValue": "5", "bestRating": "5"},
                },
                {
                    "@type": "Review",
                    "author": "Sam",
                    "reviewBody": "Okay",
                    "reviewRating": {"ratingValue": 8, "bestRating": 10},
                },
                {"@type": "Review", "author": "Empty", "reviewBody": "", "reviewRating": {"ratingValue": 4}},
            ],
        }
        extractor = ProductReviewsExtractor(shop_profile)
        reviews = list(extractor.extract(page(json_ld(product)), PRODUCT_URL))

        assert len(reviews) == 2
        assert all(isinstance(r, ReviewRecord) for r in reviews)
        assert reviews[0].rating == 5.0
        assert reviews[0].author == "Jo"
        assert reviews[0].title == "Great"
        assert reviews[0].review_date == date(2024, 3, 15)
        assert reviews[1].rating == 4.0
        assert reviews[0].metadata["source"] == SOURCE_STRUCTURED_DATA
        assert reviews[0].external_id.startswith("test-shop-review-")

    def test_generated_ids_are_stable(self, shop_profile):
        """Test reviews without ids get the same id on every run."""
        product = {
            "@type": "Product",
            "name": "Widget",
            "review": {"@type": "Review", "reviewBody": "Nice", "reviewRating": {"ratingValue": 4}},
        }
        html = page(json_ld(product))
        extractor = ProductReviewsExtractor(shop_profile)

        first = [r.external_id for r in extractor.extract(html, PRODUCT_URL)]
        second = [r.external_id for r in extractor.extract(html, PRODUCT_URL)]
        assert first == second
        assert len(first) == 1

    def test_dom_reviews(self, shop_profile):
        """Test DOM review containers, star icons and discarded candidates."""
        html = page(
            '<div class="review-item" data-review-id="review-123">'
            '<span class="score" data-rating="4"></span>'
            '<h4 class="review-title">Good value</h4>'
            '<span class="review-author">Alex</span>'
            '<time datetime="2024-01-05">5 Jan</time>'
            '<p class="review-body">Arrived quickly and the dog was happy.</p>'
            '<span class="verified-purchase">Verified Purchase</span>'
            '<span class="helpful-count">3 people found this helpful</span>'
            "</div>"
            '<div class="review-item">'
            '<div class="stars"><i class="star-filled"></i><i class="star-filled"></i>'
            '<i class="star-filled"></i><i class="star-empty"></i></div>'
            '<p class="review-body">Decent.</p>'
            "</div>"
            '<div class="review-item"><p class="review-body">No rating here.</p></div>'
        )
        reviews = list(ProductReviewsExtractor(shop_profile).extract(html, PRODUCT_URL))

        assert len(reviews) == 2
        first, second = reviews
        assert first.external_id == "123"
        assert first.rating == 4.0
        assert first.title == "Good value"
        assert first.author == "Alex"
        assert first.review_date == date(2024, 1, 5)
        assert first.verified_purchase is True
        assert first.helpful_count == 3
        assert first.metadata["source"] == SOURCE_DOM

        assert second.rating == 3.0
        assert second.body == "Decent."
        assert second.verified_purchase is False

    def test_structured_reviews_take_precedence(self, shop_profile):
        """Test DOM reviews are ignored when JSON-LD reviews exist."""
        product = {
            "@type": "Product",
            "name": "Widget",
            "review": {"@type": "Review", "reviewBody": "From JSON", "reviewRating": {"ratingValue": 5}},
        }
        html = page(
            json_ld(product)
            + '<div class="review-item" data-rating="2"><p class="review-body">From DOM</p></div>'
        )
        reviews = list(ProductReviewsExtractor(shop_profile).extract(html, PRODUCT_URL))
        assert [r.body for r in reviews] == ["From JSON"]

    def test_amazon_reviews(self):
        """Test Amazon review markup."""
        html = page(
            '<div data-hook="review" id="R1ABCDEF">'
            '<i data-hook="review-star-rating" class="a-icon a-icon-star a-star-4">'
            '<span class="a-icon-alt">4.0 out of 5 stars</span></i>'
            '<a data-hook="review-title"><span class="a-icon-alt">4.0 out of 5 stars</span>'
            "<span>Good food</span></a>"
            '<span class="a-profile-name">Chris</span>'
            '<span data-hook="review-date">Reviewed in the United Kingdom on 5 January 2024</span>'
            '<span data-hook="review-body"><span>My dog eats it every day.</span></span>'
            '<span data-hook="avp-badge">Verified Purchase</span>'
            '<span data-hook="helpful-vote-statement">12 people found this helpful</span>'
            "</div>",
            title="Amazon.co.uk",
        )
        url = "https://www.amazon.co.uk/dp/B00ABCDEF1"
        review = next(ProductReviewsExtractor(amazon.PROFILE).extract(html, url))

        assert review.external_id == "R1ABCDEF"
        assert review.rating == 4.0
        assert review.title == "Good food"
        assert review.author == "Chris"
        assert review.review_date == date(2024, 1, 5)
        assert review.body == "My dog eats it every day."
        assert review.verified_purchase is True
        assert review.helpful_count == 12

    @pytest.mark.parametrize(
        "url, expected",
        [(PRODUCT_URL, True), ("https://shop.example/c/dog", False)],
    )
    def test_can_handle(self, shop_profile, url, expected):
        """Test reviews are only read from product pages."""
        assert ProductReviewsExtractor(shop_profile).can_handle(url) is expected

    def test_rating_scale_without_value_discarded(self, shop_profile):
        """Test a review that only states the rating scale has no rating."""
        product = {
            "@type": "Product",
            "name": "Widget",
            "review": [
                {"@type": "Review", "reviewBody": "No stars given", "reviewRating": {"bestRating": "5"}},
                {"@type": "Review", "reviewBody": "Empty stars", "reviewRating": {"ratingValue": "", "bestRating": 5}},
                {"@type": "Review", "reviewBody": "Solid", "reviewRating": {"ratingValue": "3", "bestRating": "5"}},
            ],
        }
        reviews = list(ProductReviewsExtractor(shop_profile).extract(page(json_ld(product)), PRODUCT_URL))

        assert [(r.body, r.rating) for r in reviews] == [("Solid", 3.0)]

    def test_only_scale_given_yields_nothing(self, shop_profile):
        """Test a page whose single review lacks a rating value yields no reviews."""
        product = {
            "@type": "Product",
            "name": "Widget",
            "review": {"@type": "Review", "reviewBody": "No stars given", "reviewRating": {"bestRating": "5"}},
        }
        assert list(ProductReviewsExtractor(shop_profile).extract(page(json_ld(product)), PRODUCT_URL)) == []

    def test_reviews_are_streamed(self, shop_profile):
        """Test reviews are built one at a time as the consumer asks for them."""
        html = page(
            "".join(
                f'<div class="review-item" data-rating="4"><p class="review-body">Review {n}</p></div>'
                for n in range(50)
            )
        )
        extractor = ProductReviewsExtractor(shop_profile)

        with patch.object(extractor, "_build", wraps=extractor._build) as build, capture_logs() as logs:
            reviews = extractor.extract(html, PRODUCT_URL)
            first = next(reviews)
            assert build.call_count == 1
            assert not any(log["event"] == "reviews_extracted" for log in logs)

            rest = list(reviews)

        assert first.body == "Review 0"
        assert len(rest) == 49
        assert build.call_count == 50
        summary = [log for log in logs if log["event"] == "reviews_extracted"]
        assert summary[0]["count"] == 50
        assert summary[0]["source"] == SOURCE_DOM


# ============================================================================
# BLOCKED PAGES
# ============================================================================

BLOCK_TEST_PRODUCT = {
    "@type": "Product",
    "name": "Widget",
    "offers": {"price": "5.50"},
    "review": {"@type": "Review", "reviewBody": "Lovely", "reviewRating": {"ratingValue": 5}},
}
BLOCK_TEST_BODY = json_ld(BLOCK_TEST_PRODUCT) + '<h1 class="product-title">Widget</h1><a href="/product/a">A</a>'

EXTRACTOR_PAGES = [
    pytest.param(0, "https://shop.example/c/dog", id="listing"),
    pytest.param(1, PRODUCT_URL, id="details"),
    pytest.param(2, PRODUCT_URL, id="reviews"),
]


class TestBlockedPages:
    """Test every extractor kind yields nothing for block pages."""

    @pytest.mark.parametrize("index, url", EXTRACTOR_PAGES)
    def test_page_yields_records_when_not_blocked(self, registry, index, url):
        """Test the shared page content is extractable when nothing blocks it."""
        extractor = registry.create_extractors("test-shop")[index]
        assert extractor.can_handle(url)
        assert list(extractor.extract(page(BLOCK_TEST_BODY), url))

    @pytest.mark.parametrize(
        "html",
        [
            pytest.param(page("<p>Please complete the captcha to continue</p>" + BLOCK_TEST_BODY), id="captcha"),
            pytest.param(page(BLOCK_TEST_BODY, title="Robot Check"), id="robot-check-title"),
        ],
    )
    @pytest.mark.parametrize("index, url", EXTRACTOR_PAGES)
    def test_blocked_page_yields_nothing(self, registry, index, url, html):
        """Test captcha text or a robot-check title suppresses all records."""
        extractor = registry.create_extractors("test-shop")[index]

        with capture_logs() as logs:
            records = list(extractor.extract(html, url))

        assert records == []
        assert any(log["event"] == "blocked_page_detected" for log in logs)
