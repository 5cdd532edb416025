"""Retailer profiles.

Each module exposes a PROFILE; ALL_RETAILERS lists them in registration
order, which is also the order URL lookups try them in.
"""

from retailcrawl.crawler.retailers import (
    amazon,
    asda,
    bm,
    just_for_pets,
    morrisons,
    ocado,
    pets_at_home,
    sainsburys,
    tesco,
    waitrose,
    zooplus,
)
from retailcrawl.crawler.retailers.profile import (
    DetailsSelectors,
    ListingRules,
    RetailerProfile,
    ReviewSelectors,
)

ALL_RETAILERS = (
    amazon.PROFILE,
    asda.PROFILE,
    bm.PROFILE,
    just_for_pets.PROFILE,
    morrisons.PROFILE,
    ocado.PROFILE,
    pets_at_home.PROFILE,
    sainsburys.PROFILE,
    tesco.PROFILE,
    waitrose.PROFILE,
    zooplus.PROFILE,
)

__all__ = [
    "ALL_RETAILERS",
    "DetailsSelectors",
    "ListingRules",
    "RetailerProfile",
    "ReviewSelectors",
]
