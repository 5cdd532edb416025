"""Extraction and crawling engine.

This package provides:
- Record types and the Extractor contract
- Generic listing, details and review extractors driven by retailer profiles
- The pagination/dedup orchestrator and the HTTP fetch adapter
- A registry of the built-in retailers and a runner for crawl runs
"""

from .base import (
    Extractor,
    ListingUrlRecord,
    PaginationToken,
    ProductDetailsRecord,
    ReviewRecord,
)
from .factory import ExtractorRegistry, extractor_registry, get_extractor_registry
from .http_client import FetchOptions, FetchResponse, HttpFetcher
from .orchestrator import Crawler, CrawlStats

__all__ = [
    # Records and contract
    "Extractor",
    "ListingUrlRecord",
    "PaginationToken",
    "ProductDetailsRecord",
    "ReviewRecord",
    # Registry
    "ExtractorRegistry",
    "extractor_registry",
    "get_extractor_registry",
    # HTTP
    "FetchOptions",
    "FetchResponse",
    "HttpFetcher",
    # Orchestration
    "Crawler",
    "CrawlStats",
]
