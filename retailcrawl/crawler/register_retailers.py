"""Register the built-in retailer profiles with the registry.

Call register_all_retailers() once at startup (the CLI does) before
resolving retailers by slug or URL.
"""

from typing import Optional

import structlog

from retailcrawl.crawler.factory import ExtractorRegistry, get_extractor_registry
from retailcrawl.crawler.retailers import ALL_RETAILERS


logger = structlog.get_logger(__name__)


def register_all_retailers(registry: Optional[ExtractorRegistry] = None) -> ExtractorRegistry:
    """Register every built-in retailer profile.

    Args:
        registry: Registry to populate; defaults to the global registry

    Returns:
        The populated registry
    """
    registry = registry or get_extractor_registry()

    for profile in ALL_RETAILERS:
        try:
            registry.register_retailer(profile)
        except ValueError as e:
            logger.error(
                "retailer_registration_failed",
                retailer=getattr(profile, "slug", None),
                error=str(e),
            )

    logger.info(
        "retailer_registration_complete",
        total_registered=len(registry.get_registered_retailers()),
        retailers=registry.get_registered_retailers(),
    )
    return registry
