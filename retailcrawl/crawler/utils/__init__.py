"""Crawler utilities for normalization, proxies, throttling and retries."""

from .normalizer import (
    parse_price,
    format_price,
    parse_weight,
    parse_quantity,
    normalize_barcode,
    canonicalize_url,
    absolutize_url,
    DEFAULT_QUANTITY_PATTERNS,
)
from .category import CategoryRule, CategoryClassifier, category_from_url, CATEGORY_PATTERNS
from .brands import brand_from_title, KNOWN_BRANDS
from .proxy_manager import (
    ProxyAdapter,
    NoProxy,
    RotatingProxyProvider,
    StaticProxyPool,
    ProxyManager,
    build_proxy_adapter,
)
from .rate_limiter import RequestThrottle
from .user_agents import UserAgentRotator, get_random_user_agent, USER_AGENTS
from .retry import crawl_retry


__all__ = [
    # Normalization
    "parse_price",
    "format_price",
    "parse_weight",
    "parse_quantity",
    "normalize_barcode",
    "canonicalize_url",
    "absolutize_url",
    "DEFAULT_QUANTITY_PATTERNS",
    # Categories and brands
    "CategoryRule",
    "CategoryClassifier",
    "category_from_url",
    "CATEGORY_PATTERNS",
    "brand_from_title",
    "KNOWN_BRANDS",
    # Proxy management
    "ProxyAdapter",
    "NoProxy",
    "RotatingProxyProvider",
    "StaticProxyPool",
    "ProxyManager",
    "build_proxy_adapter",
    # Throttling
    "RequestThrottle",
    # User agents
    "UserAgentRotator",
    "get_random_user_agent",
    "USER_AGENTS",
    # Retry decorators
    "crawl_retry",
]
