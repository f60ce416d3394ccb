"""
Admin review of confidentiality agreements.

Approving an NDA issues a one-off token; the requester uses it to open the
listing's financial package at /api/listings/{slug}/financials?token=...
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from brokerage.auth.tokens import generate_token
from brokerage.db.database import get_db
from brokerage.db.models import NdaSubmission

logger = logging.getLogger(__name__)
router = APIRouter()

NDA_STATUSES = ("pending", "approved", "rejected")


class NdaUpdate(BaseModel):
    status: Optional[str] = None
    notes: Optional[str] = None


def nda_to_dict(nda: NdaSubmission) -> dict:
    return {
        "id": nda.id,
        "listing_slug": nda.listing_slug,
        "listing_title": nda.listing_title,
        "first_name": nda.first_name,
        "last_name": nda.last_name,
        "email": nda.email,
        "phone": nda.phone,
        "company": nda.company,
        "signature_name": nda.signature_name,
        "status": nda.status,
        "approval_token": nda.approval_token,
        "notes": nda.notes,
        "created_at": nda.created_at.isoformat() if nda.created_at else None,
        "updated_at": nda.updated_at.isoformat() if nda.updated_at else None,
    }


@router.get("")
async def list_ndas(db: Session = Depends(get_db)):
    ndas = (
        db.query(NdaSubmission)
        .filter(NdaSubmission.is_deleted == False)
        .order_by(NdaSubmission.created_at.desc())
        .all()
    )
    return [nda_to_dict(n) for n in ndas]


@router.patch("/{nda_id}")
async def update_nda(nda_id: str, data: NdaUpdate, db: Session = Depends(get_db)):
    """
    Change an NDA's status or notes.

    Every approval issues a fresh token, so re-approving revokes the old link.
    Rejection clears the token.
    """
    nda = (
        db.query(NdaSubmission)
        .filter(NdaSubmission.id == nda_id, NdaSubmission.is_deleted == False)
        .first()
    )
    if not nda:
        raise HTTPException(status_code=404, detail="NDA not found")

    if data.status is not None:
        if data.status not in NDA_STATUSES:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid status. Must be one of: {list(NDA_STATUSES)}",
            )
        nda.status = data.status
        if data.status == "approved":
            nda.approval_token = generate_token()
        elif data.status == "rejected":
            nda.approval_token = None
        logger.info(f"NDA {nda.id} marked {data.status}")

    if data.notes is not None:
        nda.notes = data.notes.strip() or None

    db.commit()
    db.refresh(nda)
    return nda_to_dict(nda)
