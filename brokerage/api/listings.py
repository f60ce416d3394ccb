"""
Public listing API endpoints.
"""

import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from brokerage.config import get_settings
from brokerage.db.database import get_db
from brokerage.db.models import Listing, NdaSubmission
from brokerage.services.listings import (
    filter_listings,
    investment_summary_for_listing,
    listing_to_response,
    sold_leased_label,
)

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


def published_listings(db: Session):
    return db.query(Listing).filter(
        Listing.published == True,
        Listing.is_deleted == False,
    )


def get_published_listing(db: Session, slug: str) -> Listing:
    listing = published_listings(db).filter(Listing.slug == slug).first()
    if not listing:
        raise HTTPException(status_code=404, detail="Listing not found")
    return listing


@router.get("")
async def list_listings(
    property_type: Optional[str] = None,
    listing_type: Optional[str] = None,
    city: Optional[str] = None,
    feature: List[str] = Query(default=[]),
    db: Session = Depends(get_db),
):
    """Active and pending listings, newest first, with page filters."""
    rows = (
        published_listings(db)
        .filter(Listing.status != "Sold")
        .order_by(Listing.created_at.desc())
        .all()
    )
    listings = filter_listings(
        [listing_to_response(row) for row in rows],
        property_type=property_type,
        listing_type=listing_type,
        city=city,
        features=feature,
    )
    return {"listings": listings, "total": len(listings)}


@router.get("/featured")
async def list_featured_listings(db: Session = Depends(get_db)):
    """Listings flagged for the home page."""
    rows = (
        published_listings(db)
        .filter(Listing.featured == True, Listing.status != "Sold")
        .order_by(Listing.created_at.desc())
        .all()
    )
    return {"listings": [listing_to_response(row) for row in rows], "total": len(rows)}


@router.get("/sold")
async def list_sold_listings(db: Session = Depends(get_db)):
    """Closed deals, most recent first."""
    rows = (
        published_listings(db)
        .filter(Listing.status == "Sold")
        .order_by(Listing.sold_date.desc(), Listing.created_at.desc())
        .all()
    )
    deals = []
    for row in rows:
        data = listing_to_response(row)
        data["sold_leased_label"] = sold_leased_label(
            row.listing_type, row.transaction_outcome
        )
        deals.append(data)
    return {"listings": deals, "total": len(deals)}


@router.get("/{slug}")
async def get_listing(slug: str, db: Session = Depends(get_db)):
    """A single listing, with default investment metrics when available."""
    listing = get_published_listing(db, slug)
    data = listing_to_response(listing)

    summary = investment_summary_for_listing(listing)
    data["investment_summary"] = summary.to_dict() if summary else None
    if listing.status == "Sold":
        data["sold_leased_label"] = sold_leased_label(
            listing.listing_type, listing.transaction_outcome
        )
    return data


@router.get("/{slug}/investment-summary")
async def get_investment_summary(
    slug: str,
    down_payment: Optional[float] = None,
    interest_rate: Optional[float] = None,
    db: Session = Depends(get_db),
):
    """Investment metrics for a listing under the given financing."""
    listing = get_published_listing(db, slug)
    summary = investment_summary_for_listing(listing, down_payment, interest_rate)
    if summary is None:
        raise HTTPException(
            status_code=404, detail="Investment metrics not available for this listing"
        )
    return summary.to_dict()


@router.get("/{slug}/financials")
async def get_financials(
    slug: str,
    token: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Serve the NDA-gated financial package to an approved requester."""
    if not token or not token.strip():
        raise HTTPException(status_code=400, detail="Token required")

    submission = (
        db.query(NdaSubmission)
        .filter(
            NdaSubmission.approval_token == token,
            NdaSubmission.listing_slug == slug,
            NdaSubmission.status == "approved",
            NdaSubmission.is_deleted == False,
        )
        .first()
    )
    if not submission:
        raise HTTPException(status_code=403, detail="Access denied or invalid link")

    listing = published_listings(db).filter(Listing.slug == slug).first()
    if not listing or not listing.financial_doc_path:
        raise HTTPException(status_code=404, detail="Financial document not available")

    public_root = os.path.realpath(settings.public_dir)
    rel_path = listing.financial_doc_path.lstrip("/")
    file_path = os.path.realpath(os.path.join(public_root, rel_path))
    if os.path.commonpath([public_root, file_path]) != public_root:
        logger.error(f"Financial document for {slug} resolves outside {public_root}")
        raise HTTPException(status_code=404, detail="File not found")
    if not os.path.isfile(file_path):
        logger.error(f"Financial document missing for {slug}: {file_path}")
        raise HTTPException(status_code=404, detail="File not found")

    logger.info(f"Financials for {slug} served to NDA {submission.id}")
    return FileResponse(
        file_path,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="financials-{slug}.pdf"'},
    )
