"""Application configuration via Pydantic Settings."""

from typing import Dict, List, Optional

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetailerCrawlSettings(BaseModel):
    """Per-retailer crawl limits. Unset values fall back to the global defaults."""

    max_pages: Optional[int] = None
    request_delay_ms: Optional[int] = None


DEFAULT_RETAILER_OVERRIDES: Dict[str, RetailerCrawlSettings] = {
    "amazon-uk": RetailerCrawlSettings(max_pages=50, request_delay_ms=3000),
    "pets-at-home": RetailerCrawlSettings(max_pages=100, request_delay_ms=2000),
    "tesco": RetailerCrawlSettings(max_pages=50, request_delay_ms=2000),
    "asda": RetailerCrawlSettings(max_pages=50, request_delay_ms=2000),
    "sainsburys": RetailerCrawlSettings(max_pages=50, request_delay_ms=2000),
    "morrisons": RetailerCrawlSettings(max_pages=50, request_delay_ms=2000),
    "bm": RetailerCrawlSettings(max_pages=30, request_delay_ms=2000),
    "just-for-pets": RetailerCrawlSettings(max_pages=30, request_delay_ms=2000),
    "waitrose": RetailerCrawlSettings(max_pages=50, request_delay_ms=2000),
    # Ocado has strong anti-bot measures
    "ocado": RetailerCrawlSettings(max_pages=50, request_delay_ms=3000),
}


class Settings(BaseSettings):
    """Global crawler settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Crawl limits
    DEFAULT_MAX_PAGES: int = 20
    DEFAULT_REQUEST_DELAY_MS: int = 2000
    RETAILER_OVERRIDES: Dict[str, RetailerCrawlSettings] = dict(DEFAULT_RETAILER_OVERRIDES)

    # HTTP
    HTTP_TIMEOUT_SECONDS: float = 30.0
    HTTP_CONNECT_TIMEOUT_SECONDS: float = 10.0
    HTTP_MAX_REDIRECTS: int = 5
    ROTATE_USER_AGENT: bool = True
    ROTATE_PROXY: bool = True

    # Bright Data residential proxy
    BRIGHTDATA_USERNAME: str = ""
    BRIGHTDATA_PASSWORD: str = ""
    BRIGHTDATA_HOST: str = "brd.superproxy.io"
    BRIGHTDATA_PORT: int = 22225
    BRIGHTDATA_ZONE: str = "residential"
    BRIGHTDATA_COUNTRY: str = "gb"

    # Static proxies
    PROXY_LIST: str = ""  # Comma-separated list of proxy URLs

    # Runner
    CRAWL_RUN_ATTEMPTS: int = 3

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @model_validator(mode="after")
    def check_limits(self) -> "Settings":
        """Crawl limits must be usable as a hard page cap and a sleep interval."""
        if self.DEFAULT_MAX_PAGES < 1:
            raise ValueError("DEFAULT_MAX_PAGES must be at least 1")
        if self.DEFAULT_REQUEST_DELAY_MS < 0:
            raise ValueError("DEFAULT_REQUEST_DELAY_MS must not be negative")
        self.LOG_LEVEL = self.LOG_LEVEL.upper()
        return self

    def get_proxy_list(self) -> List[str]:
        """Parse PROXY_LIST into a list of proxy URLs.

        Returns:
            List of proxy URL strings, empty if PROXY_LIST is not set
        """
        if not self.PROXY_LIST:
            return []
        return [p.strip() for p in self.PROXY_LIST.split(",") if p.strip()]

    def get_max_pages(self, retailer_slug: str) -> int:
        """Page cap for a retailer, falling back to DEFAULT_MAX_PAGES."""
        override = self.RETAILER_OVERRIDES.get(retailer_slug)
        if override and override.max_pages is not None:
            return override.max_pages
        return self.DEFAULT_MAX_PAGES

    def get_request_delay_ms(self, retailer_slug: str) -> int:
        """Delay between page fetches for a retailer, falling back to DEFAULT_REQUEST_DELAY_MS."""
        override = self.RETAILER_OVERRIDES.get(retailer_slug)
        if override and override.request_delay_ms is not None:
            return override.request_delay_ms
        return self.DEFAULT_REQUEST_DELAY_MS

    def has_brightdata_credentials(self) -> bool:
        return bool(self.BRIGHTDATA_USERNAME and self.BRIGHTDATA_PASSWORD)


settings = Settings()
