"""
Application services module.
"""

from brokerage.services.listings import (
    filter_listings,
    investment_summary_for_listing,
    listing_to_response,
    resolve_record_id,
    sold_leased_label,
)
from brokerage.services.slugs import unique_slug

__all__ = [
    "filter_listings",
    "investment_summary_for_listing",
    "listing_to_response",
    "resolve_record_id",
    "sold_leased_label",
    "unique_slug",
]
