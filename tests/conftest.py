"""Pytest configuration and shared fixtures."""

from typing import Dict, List, Optional

import pytest

from retailcrawl.config import Settings
from retailcrawl.core.exceptions import FetchError
from retailcrawl.crawler.factory import ExtractorRegistry
from retailcrawl.crawler.http_client import FetchOptions, FetchResponse
from retailcrawl.crawler.retailers.profile import RetailerProfile


class FakeFetcher:
    """In-memory fetcher serving canned pages by URL.

    URLs listed in `failures` fail with HTTP 503 that many times before
    succeeding; URLs without a page fail with HTTP 404.
    """

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, int]] = None,
        default_page: Optional[str] = None,
    ):
        self.pages = dict(pages or {})
        self.failures = dict(failures or {})
        self.default_page = default_page
        self.calls: List[str] = []
        self.options: List[Optional[FetchOptions]] = []

    async def fetch(self, url: str, options: Optional[FetchOptions] = None) -> FetchResponse:
        self.calls.append(url)
        self.options.append(options)

        remaining = self.failures.get(url, 0)
        if remaining > 0:
            self.failures[url] = remaining - 1
            raise FetchError(url, "HTTP 503", status_code=503)

        body = self.pages.get(url, self.default_page)
        if body is None:
            raise FetchError(url, "HTTP 404", status_code=404)
        return FetchResponse(body=body, status_code=200, url=url)


@pytest.fixture
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def shop_profile() -> RetailerProfile:
    """A minimal retailer using every default selector chain."""
    return RetailerProfile(
        slug="test-shop",
        name="Test Shop",
        domains=("shop.example",),
        product_url_patterns=(r"/product/",),
        external_id_patterns=(r"/product/([a-z0-9-]+)",),
        starting_urls=("https://shop.example/c/dog",),
    )


@pytest.fixture
def registry(shop_profile: RetailerProfile) -> ExtractorRegistry:
    """Registry holding only the test retailer."""
    registry = ExtractorRegistry()
    registry.register_retailer(shop_profile)
    return registry


@pytest.fixture
def make_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher


def page(body: str, title: str = "Test Shop") -> str:
    """Wrap body markup in a minimal HTML document."""
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


@pytest.fixture
def html_page():
    """Builder wrapping body markup in an HTML document."""
    return page
