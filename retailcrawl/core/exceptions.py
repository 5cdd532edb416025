"""Custom exception classes for the crawler."""

from typing import Optional


class RetailCrawlException(Exception):
    """Base exception for all retailcrawl errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class FetchError(RetailCrawlException):
    """Raised when a page cannot be fetched (transport error or non-2xx)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch URL: {url}. Error: {message}")


class CrawlError(RetailCrawlException):
    """Raised when a crawl run for a retailer cannot proceed."""

    def __init__(self, retailer: str, message: str):
        self.retailer = retailer
        super().__init__(f"Crawl error for {retailer}: {message}")


class StartPageUnavailable(CrawlError):
    """Raised by the runner when the first page of a crawl could not be fetched."""

    def __init__(self, retailer: str, url: str):
        self.url = url
        super().__init__(retailer, f"start page unavailable: {url}")


class RetailerNotFoundError(RetailCrawlException):
    """Raised when no retailer profile matches a slug or URL."""

    def __init__(self, identifier: str):
        super().__init__(f"No retailer registered for '{identifier}'")


class ProxyError(RetailCrawlException):
    """Raised when a proxy provider is misconfigured."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"Proxy error for {provider}: {message}")
