"""
Admin listing management endpoints.
"""

import json
import logging
import math
from datetime import date
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy import case
from sqlalchemy.orm import Session

from brokerage.config import get_settings
from brokerage.db.database import get_db
from brokerage.db.models import Agent, Listing, ListingBroker
from brokerage.formatting import digits_only, format_lease_rate_input, parse_formatted_number
from brokerage.services.listings import (
    LISTING_STATUSES,
    broker_to_dict,
    resolve_record_id,
)
from brokerage.services.slugs import unique_slug

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()

# Form fields arrive either typed or as the raw strings from text inputs
NumberInput = Optional[Union[float, str]]


class ListingCreate(BaseModel):
    """Schema for creating a listing from the admin form."""

    title: Optional[str] = None
    slug: Optional[str] = None
    nickname: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: NumberInput = None
    longitude: NumberInput = None
    listing_type: Optional[str] = None
    property_type: Optional[str] = None
    land_subcategory: Optional[str] = None
    square_feet: NumberInput = None
    acreage: NumberInput = None
    is_multi_tenant: bool = False
    unit_count: NumberInput = None
    description: Optional[str] = None
    features: Optional[Union[List[str], str]] = None
    hero_image: Optional[str] = None
    gallery_images: Optional[Union[List[str], str]] = None
    floor_plan: Optional[str] = None
    site_plan: Optional[str] = None
    brochure: Optional[str] = None
    financial_doc_path: Optional[str] = None
    youtube_link: Optional[str] = None
    noi: NumberInput = None
    price: NumberInput = None
    price_negotiable: bool = False
    lease_type: Optional[str] = None
    lease_price_per_sf: NumberInput = None
    lease_nnn_charges: NumberInput = None
    cap_rate: NumberInput = None
    occupancy: Optional[str] = None
    broker_ids: List[str] = []


class ListingUpdate(BaseModel):
    """Partial update; only the fields sent are touched."""

    title: Optional[str] = None
    slug: Optional[str] = None
    nickname: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: NumberInput = None
    longitude: NumberInput = None
    listing_type: Optional[str] = None
    property_type: Optional[str] = None
    land_subcategory: Optional[str] = None
    square_feet: NumberInput = None
    acreage: NumberInput = None
    is_multi_tenant: Optional[bool] = None
    unit_count: NumberInput = None
    description: Optional[str] = None
    features: Optional[Union[List[str], str]] = None
    hero_image: Optional[str] = None
    gallery_images: Optional[Union[List[str], str]] = None
    floor_plan: Optional[str] = None
    site_plan: Optional[str] = None
    brochure: Optional[str] = None
    financial_doc_path: Optional[str] = None
    youtube_link: Optional[str] = None
    noi: NumberInput = None
    price: NumberInput = None
    price_negotiable: Optional[bool] = None
    lease_type: Optional[str] = None
    lease_price_per_sf: NumberInput = None
    lease_nnn_charges: NumberInput = None
    cap_rate: NumberInput = None
    occupancy: Optional[str] = None
    published: Optional[bool] = None
    featured: Optional[bool] = None
    status: Optional[str] = None
    transaction_outcome: Optional[str] = None
    sold_price: NumberInput = None
    sold_date: Optional[str] = None
    sold_notes: Optional[str] = None
    broker_ids: Optional[List[str]] = None


# === Coercion helpers ===

def to_float(value: Any) -> Optional[float]:
    """Number from a form value; blanks and garbage become None."""
    if value is None or value == "":
        return None
    try:
        n = float(str(value).replace(",", ""))
    except ValueError:
        return None
    return n if math.isfinite(n) else None


def to_whole_number(value: Any) -> Optional[int]:
    """
    Whole dollars or square feet as typed in the admin form: "$1,500,000" -> 1500000.

    Cents are dropped. A value with no digits becomes None.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    whole = str(value).partition(".")[0]
    if not digits_only(whole):
        return None
    return parse_formatted_number(whole)


def to_lease_rate(value: Any) -> Optional[float]:
    """$/SF rate, truncated to cents the way the admin input formats it."""
    if isinstance(value, str):
        return to_float(format_lease_rate_input(value))
    return to_float(value)


def text_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_string_list(value: Any) -> List[str]:
    """Accept a list or a JSON-encoded list; anything else is empty."""
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, str) and value.strip():
        try:
            parsed = json.loads(value)
        except ValueError:
            return []
        if isinstance(parsed, list):
            return [str(v) for v in parsed]
    return []


def to_date(value: Optional[str]) -> Optional[date]:
    text = text_or_none(value)
    if text is None:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {text}")


def admin_listing_to_dict(listing: Listing) -> Dict[str, Any]:
    """Every stored field, for the admin editor."""
    return {
        "id": listing.id,
        "slug": listing.slug,
        "title": listing.title,
        "nickname": listing.nickname,
        "address": listing.address,
        "city": listing.city,
        "state": listing.state,
        "zip_code": listing.zip_code,
        "latitude": listing.latitude,
        "longitude": listing.longitude,
        "listing_type": listing.listing_type,
        "property_type": listing.property_type,
        "land_subcategory": listing.land_subcategory,
        "square_feet": listing.square_feet,
        "acreage": listing.acreage,
        "is_multi_tenant": listing.is_multi_tenant,
        "unit_count": listing.unit_count,
        "description": listing.description,
        "features": listing.features or [],
        "hero_image": listing.hero_image,
        "gallery_images": listing.gallery_images or [],
        "floor_plan": listing.floor_plan,
        "site_plan": listing.site_plan,
        "brochure": listing.brochure,
        "financial_doc_path": listing.financial_doc_path,
        "youtube_link": listing.youtube_link,
        "noi": listing.noi,
        "price": listing.price,
        "price_negotiable": listing.price_negotiable,
        "lease_type": listing.lease_type,
        "lease_price_per_sf": listing.lease_price_per_sf,
        "lease_nnn_charges": listing.lease_nnn_charges,
        "cap_rate": listing.cap_rate,
        "occupancy": listing.occupancy,
        "status": listing.status,
        "transaction_outcome": listing.transaction_outcome,
        "sold_price": listing.sold_price,
        "sold_date": listing.sold_date.isoformat() if listing.sold_date else None,
        "sold_notes": listing.sold_notes,
        "published": listing.published,
        "featured": listing.featured,
        "brokers": [
            broker_to_dict(link.agent)
            for link in listing.brokers
            if link.agent is not None and not link.agent.is_deleted
        ],
        "created_at": listing.created_at.isoformat() if listing.created_at else None,
        "updated_at": listing.updated_at.isoformat() if listing.updated_at else None,
    }


def set_brokers(db: Session, listing: Listing, agent_ids: List[str]):
    """Replace the listing's broker links, skipping unknown agents."""
    listing.brokers.clear()
    db.flush()
    seen = set()
    for agent_id in agent_ids:
        if not isinstance(agent_id, str) or agent_id in seen:
            continue
        agent = (
            db.query(Agent)
            .filter(Agent.id == agent_id, Agent.is_deleted == False)
            .first()
        )
        if agent is None:
            logger.info(f"Ignoring unknown broker {agent_id} for listing {listing.id}")
            continue
        listing.brokers.append(
            ListingBroker(agent_id=agent.id, position=len(listing.brokers))
        )
        seen.add(agent_id)


def get_listing_or_404(db: Session, raw_id: str) -> Listing:
    listing_id = resolve_record_id(raw_id)
    if not listing_id:
        raise HTTPException(status_code=400, detail="Invalid listing ID")

    listing = (
        db.query(Listing)
        .filter(Listing.id == listing_id, Listing.is_deleted == False)
        .first()
    )
    if not listing:
        raise HTTPException(status_code=404, detail="Listing not found")
    return listing


# === Endpoints ===

@router.get("")
async def list_listings(db: Session = Depends(get_db)):
    """All listings including drafts: active first, then pending, then sold."""
    status_rank = case(
        (Listing.status == "Active", 0),
        (Listing.status == "Pending", 1),
        else_=2,
    )
    listings = (
        db.query(Listing)
        .filter(Listing.is_deleted == False)
        .order_by(status_rank, Listing.created_at.desc())
        .all()
    )
    return [admin_listing_to_dict(listing) for listing in listings]


@router.post("", status_code=201)
async def create_listing(data: ListingCreate, db: Session = Depends(get_db)):
    """Create a draft listing (unpublished, not featured)."""
    title = data.title or data.nickname or data.address or "New Listing"
    slug = unique_slug(db, Listing, data.slug or title, fallback="listing")

    latitude = to_float(data.latitude)
    longitude = to_float(data.longitude)

    listing = Listing(
        slug=slug,
        title=title,
        nickname=text_or_none(data.nickname),
        address=data.address or "",
        city=data.city or "",
        state=data.state or "OH",
        zip_code=text_or_none(data.zip_code),
        latitude=latitude if latitude else settings.default_latitude,
        longitude=longitude if longitude else settings.default_longitude,
        listing_type=text_or_none(data.listing_type) or "For Sale",
        property_type=text_or_none(data.property_type) or "Retail",
        land_subcategory=text_or_none(data.land_subcategory),
        square_feet=to_whole_number(data.square_feet),
        acreage=to_float(data.acreage),
        is_multi_tenant=data.is_multi_tenant,
        unit_count=to_whole_number(data.unit_count),
        description=data.description or "",
        features=to_string_list(data.features),
        hero_image=text_or_none(data.hero_image),
        gallery_images=to_string_list(data.gallery_images),
        floor_plan=text_or_none(data.floor_plan),
        site_plan=text_or_none(data.site_plan),
        brochure=text_or_none(data.brochure),
        financial_doc_path=text_or_none(data.financial_doc_path),
        youtube_link=text_or_none(data.youtube_link),
        noi=to_float(data.noi),
        price=None if data.price_negotiable else to_whole_number(data.price),
        price_negotiable=data.price_negotiable,
        lease_type=text_or_none(data.lease_type),
        lease_price_per_sf=to_lease_rate(data.lease_price_per_sf),
        lease_nnn_charges=to_lease_rate(data.lease_nnn_charges),
        cap_rate=to_float(data.cap_rate),
        occupancy=text_or_none(data.occupancy),
        published=False,
        featured=False,
    )
    db.add(listing)
    db.flush()

    if data.broker_ids:
        set_brokers(db, listing, data.broker_ids)

    db.commit()
    db.refresh(listing)

    logger.info(f"Listing {listing.id} created ({listing.slug})")
    return admin_listing_to_dict(listing)


@router.get("/{listing_id}")
async def get_listing(listing_id: str, db: Session = Depends(get_db)):
    """Get a listing by ID."""
    return admin_listing_to_dict(get_listing_or_404(db, listing_id))


@router.patch("/{listing_id}")
async def update_listing(
    listing_id: str,
    data: ListingUpdate,
    db: Session = Depends(get_db),
):
    """Update only the fields provided, coercing form strings."""
    listing = get_listing_or_404(db, listing_id)
    fields = data.model_dump(exclude_unset=True)

    required_text = ("title", "address", "city", "state", "property_type", "description")
    optional_text = (
        "nickname",
        "zip_code",
        "land_subcategory",
        "hero_image",
        "floor_plan",
        "site_plan",
        "brochure",
        "financial_doc_path",
        "youtube_link",
        "lease_type",
        "occupancy",
        "sold_notes",
    )
    float_fields = ("acreage", "noi", "cap_rate")
    whole_fields = ("square_feet", "unit_count", "sold_price")
    rate_fields = ("lease_price_per_sf", "lease_nnn_charges")

    for field in required_text:
        if fields.get(field) is not None:
            setattr(listing, field, str(fields[field]))
    for field in optional_text:
        if field in fields:
            setattr(listing, field, text_or_none(fields[field]))
    for field in float_fields:
        if field in fields:
            setattr(listing, field, to_float(fields[field]))
    for field in whole_fields:
        if field in fields:
            setattr(listing, field, to_whole_number(fields[field]))
    for field in rate_fields:
        if field in fields:
            setattr(listing, field, to_lease_rate(fields[field]))

    if fields.get("slug"):
        slug = str(fields["slug"]).strip()
        if slug != listing.slug:
            listing.slug = unique_slug(db, Listing, slug, fallback="listing")

    # Bad coordinates keep the previous value
    for field in ("latitude", "longitude"):
        if fields.get(field) not in (None, ""):
            n = to_float(fields[field])
            if n is not None:
                setattr(listing, field, n)

    if "listing_type" in fields:
        listing.listing_type = text_or_none(fields["listing_type"]) or "For Sale"

    if "features" in fields:
        listing.features = to_string_list(fields["features"])
    if "gallery_images" in fields:
        listing.gallery_images = to_string_list(fields["gallery_images"])

    for flag in ("is_multi_tenant", "published", "featured"):
        if fields.get(flag) is not None:
            setattr(listing, flag, bool(fields[flag]))

    if fields.get("price_negotiable") is not None:
        listing.price_negotiable = bool(fields["price_negotiable"])
    if fields.get("price_negotiable") is True:
        listing.price = None
    elif "price" in fields:
        listing.price = to_whole_number(fields["price"])

    if fields.get("status") is not None:
        status = str(fields["status"]).strip()
        if status in LISTING_STATUSES:
            listing.status = status
    if "transaction_outcome" in fields:
        outcome = text_or_none(fields["transaction_outcome"])
        listing.transaction_outcome = outcome if outcome in ("Sold", "Leased") else None
    if "sold_date" in fields:
        listing.sold_date = to_date(fields["sold_date"])

    if data.broker_ids is not None:
        set_brokers(db, listing, data.broker_ids)

    db.commit()
    db.refresh(listing)

    logger.info(f"Listing {listing.id} updated: {sorted(fields)}")
    return admin_listing_to_dict(listing)


@router.delete("/{listing_id}")
async def delete_listing(listing_id: str, db: Session = Depends(get_db)):
    """Soft delete a listing."""
    listing = get_listing_or_404(db, listing_id)
    listing.is_deleted = True
    listing.published = False
    db.commit()

    logger.info(f"Listing {listing.id} deleted")
    return {"deleted": True, "id": listing.id}
