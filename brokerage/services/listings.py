"""
Listing presentation helpers.

Turns stored Listing rows into the public shape used by listing pages and
decides when the investment metrics block is shown.
"""

import math
import re
from typing import Dict, Iterable, List, Optional

from brokerage.calculations.investment import (
    compute_investment_summary,
    should_show_investment_metrics,
)
from brokerage.config import get_settings
from brokerage.db.models import Listing
from brokerage.formatting import youtube_embed_url

settings = get_settings()

PLACEHOLDER_HERO_IMAGE = "/images/placeholders/listing-6.jpg"

PROPERTY_TYPES = [
    "Retail",
    "Industrial",
    "Office",
    "Multifamily",
    "Land",
    "Specialty",
    "Residential",
    "Business",
]
LISTING_TYPES = ["For Sale", "For Lease", "Sale/Lease"]
LAND_SUBCATEGORIES = ["Retail", "Office", "Industrial", "Specialty", "Residential"]
LISTING_STATUSES = ["Active", "Pending", "Sold"]

DEFAULT_DOWN_PAYMENT_RATIO = 0.3
DEFAULT_INTEREST_RATE_PERCENT = 7.0

RECORD_ID = re.compile(r"^[A-Za-z0-9-]{15,40}$")


def resolve_record_id(raw: str) -> Optional[str]:
    """
    Normalise an id taken from a URL.

    Accepts "listingId|agentId" composite keys leaked by broker links and
    keeps the first part. Returns None for anything that cannot be an id.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    record_id = raw.split("|")[0].strip() if "|" in raw else raw.strip()
    if RECORD_ID.match(record_id):
        return record_id
    return None


def sold_leased_label(listing_type: str, transaction_outcome: Optional[str]) -> str:
    """Returns "Sold" or "Leased" based on listing type and transaction outcome."""
    if listing_type == "For Lease":
        return "Leased"
    if listing_type == "For Sale":
        return "Sold"
    if listing_type == "Sale/Lease":
        return "Leased" if transaction_outcome == "Leased" else "Sold"
    return "Sold"


def _coordinates(listing: Listing):
    lat, lng = listing.latitude, listing.longitude
    invalid = (
        lat is None
        or lng is None
        or math.isnan(lat)
        or math.isnan(lng)
        or (lat == 0 and lng == 0)
    )
    if invalid:
        return settings.default_latitude, settings.default_longitude
    return lat, lng


def broker_to_dict(agent) -> Dict:
    return {
        "id": agent.id,
        "name": agent.name,
        "title": agent.title,
        "email": agent.email,
        "phone": agent.phone,
        "ext": agent.ext,
        "credentials": agent.credentials,
        "headshot": agent.headshot,
    }


def listing_to_response(listing: Listing) -> Dict:
    """Convert a Listing row into the public listing payload."""
    features = listing.features if isinstance(listing.features, list) else []
    hero_image = listing.hero_image or PLACEHOLDER_HERO_IMAGE
    gallery = listing.gallery_images if isinstance(listing.gallery_images, list) else []
    latitude, longitude = _coordinates(listing)

    status = listing.status if listing.status in ("Pending", "Sold") else "Active"
    outcome = (
        listing.transaction_outcome
        if listing.transaction_outcome in ("Sold", "Leased")
        else None
    )

    data = {
        "id": listing.id,
        "slug": listing.slug,
        "title": listing.title,
        "address": listing.address,
        "city": listing.city,
        "state": listing.state,
        "zip_code": listing.zip_code,
        "latitude": latitude,
        "longitude": longitude,
        "property_type": listing.property_type,
        "land_subcategory": listing.land_subcategory,
        "listing_type": listing.listing_type,
        "price": listing.price,
        "price_negotiable": listing.price_negotiable,
        "noi": listing.noi,
        "lease_type": listing.lease_type,
        "lease_price_per_sf": listing.lease_price_per_sf,
        "lease_nnn_charges": listing.lease_nnn_charges,
        "occupancy": listing.occupancy,
        "square_feet": listing.square_feet,
        "acreage": listing.acreage,
        "features": list(features),
        "hero_image": hero_image,
        "gallery_images": list(gallery) if gallery else [hero_image],
        "brochure": listing.brochure,
        "youtube_link": listing.youtube_link,
        "youtube_embed_url": youtube_embed_url(listing.youtube_link),
        "has_financials": bool(listing.financial_doc_path),
        "description": listing.description,
        "status": status,
        "transaction_outcome": outcome,
        "sold_price": listing.sold_price,
        "sold_date": listing.sold_date.isoformat() if listing.sold_date else None,
        "sold_notes": listing.sold_notes,
        "investment_metrics": None,
        "brokers": [
            broker_to_dict(link.agent)
            for link in listing.brokers
            if link.agent is not None and not link.agent.is_deleted
        ],
    }

    if should_show_investment_metrics(listing.noi, listing.price, listing.cap_rate):
        data["investment_metrics"] = {
            "noi": listing.noi,
            "price": listing.price,
            "cap_rate": listing.cap_rate,
        }

    return data


def filter_listings(
    listings: Iterable[Dict],
    property_type: Optional[str] = None,
    listing_type: Optional[str] = None,
    city: Optional[str] = None,
    features: Optional[List[str]] = None,
) -> List[Dict]:
    """Apply the listings-page filters; every requested feature must match."""
    results = []
    for listing in listings:
        if property_type and listing["property_type"] != property_type:
            continue
        if listing_type and listing["listing_type"] != listing_type:
            continue
        if city and listing["city"] != city:
            continue
        if features and not all(f in listing["features"] for f in features):
            continue
        results.append(listing)
    return results


def investment_summary_for_listing(
    listing: Listing,
    down_payment: Optional[float] = None,
    interest_rate_percent: Optional[float] = None,
):
    """
    Run the investment engine for a stored listing.

    Returns None when the listing lacks NOI, price or cap rate, which is
    also the signal not to render the metrics block.
    """
    if not should_show_investment_metrics(listing.noi, listing.price, listing.cap_rate):
        return None

    if down_payment is None:
        down_payment = round(listing.price * DEFAULT_DOWN_PAYMENT_RATIO)
    if interest_rate_percent is None:
        interest_rate_percent = DEFAULT_INTEREST_RATE_PERCENT

    return compute_investment_summary(
        listing.noi,
        listing.price,
        listing.cap_rate,
        down_payment,
        interest_rate_percent,
    )
