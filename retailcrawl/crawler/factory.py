"""Registry of retailer profiles and the extractors built from them."""

from typing import Dict, List, Optional

import structlog

from retailcrawl.core.exceptions import RetailerNotFoundError
from retailcrawl.crawler.base import Extractor
from retailcrawl.crawler.extractors.details import ProductDetailsExtractor
from retailcrawl.crawler.extractors.listing import ListingUrlExtractor
from retailcrawl.crawler.extractors.reviews import ProductReviewsExtractor
from retailcrawl.crawler.retailers.profile import RetailerProfile


logger = structlog.get_logger(__name__)


class ExtractorRegistry:
    """Holds retailer profiles by slug and builds extractors for them.

    Lookups by URL try profiles in registration order, so the first profile
    whose domains cover the URL's host wins.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._profiles: Dict[str, RetailerProfile] = {}

    def register_retailer(self, profile: RetailerProfile) -> None:
        """Register a retailer profile.

        Args:
            profile: Retailer profile; replaces any profile with the same slug
        """
        if not isinstance(profile, RetailerProfile):
            raise ValueError(f"Expected a RetailerProfile: {profile!r}")

        self._profiles[profile.slug] = profile
        logger.info("retailer_registered", retailer=profile.slug, domains=list(profile.domains))

    def get_retailer(self, slug: str) -> RetailerProfile:
        """Get a registered profile.

        Args:
            slug: Retailer slug (e.g., "tesco")

        Raises:
            RetailerNotFoundError: If no profile is registered for the slug
        """
        profile = self._profiles.get(slug)
        if profile is None:
            raise RetailerNotFoundError(slug)
        return profile

    def find_retailer(self, url: str) -> RetailerProfile:
        """Resolve a page URL to the retailer that serves it.

        Raises:
            RetailerNotFoundError: If no registered retailer handles the host
        """
        for profile in self._profiles.values():
            if profile.handles_host(url):
                return profile
        raise RetailerNotFoundError(url)

    def create_extractors(self, slug: str) -> List[Extractor]:
        """Build the listing, details and reviews extractors for a retailer.

        Args:
            slug: Retailer slug

        Returns:
            Extractors in registration order (listing, details, reviews)
        """
        profile = self.get_retailer(slug)
        extractors: List[Extractor] = [
            ListingUrlExtractor(profile),
            ProductDetailsExtractor(profile),
            ProductReviewsExtractor(profile),
        ]
        logger.debug("extractors_created", retailer=slug, count=len(extractors))
        return extractors

    def get_registered_retailers(self) -> List[str]:
        """Get registered retailer slugs in registration order."""
        return list(self._profiles.keys())

    def get_profiles(self) -> List[RetailerProfile]:
        return list(self._profiles.values())

    def has_retailer(self, slug: str) -> bool:
        return slug in self._profiles

    def unregister_retailer(self, slug: str) -> Optional[RetailerProfile]:
        return self._profiles.pop(slug, None)


# Global registry instance
extractor_registry = ExtractorRegistry()


def get_extractor_registry() -> ExtractorRegistry:
    """Get the global extractor registry instance.

    Returns:
        ExtractorRegistry instance
    """
    return extractor_registry
