"""
Admin review of lease applications.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from brokerage.db.database import get_db
from brokerage.db.models import LeaseApplication

router = APIRouter()


class ReceivedUpdate(BaseModel):
    received: bool


def mask_ssn(ssn):
    """Show only the last four digits."""
    if not ssn:
        return None
    return f"***-**-{ssn[-4:]}"


def application_to_dict(application: LeaseApplication) -> dict:
    co_applicant = dict(application.co_applicant) if application.co_applicant else None
    if co_applicant:
        co_applicant["ssn"] = mask_ssn(co_applicant.get("ssn"))

    return {
        "id": application.id,
        "listing_slug": application.listing_slug,
        "listing_title": application.listing_title,
        "first_name": application.first_name,
        "last_name": application.last_name,
        "business_name": application.business_name,
        "use": application.use,
        "date_of_birth": application.date_of_birth,
        "phone": application.phone,
        "email": application.email,
        "ssn": mask_ssn(application.ssn),
        "business_plan_path": application.business_plan_path,
        "financials_paths": application.financials_paths or [],
        "credit_check_acknowledged": application.credit_check_acknowledged,
        "signature_name": application.signature_name,
        "co_applicant": co_applicant,
        "application_fee_cents": application.application_fee_cents,
        "payment_status": application.payment_status,
        "received": application.received,
        "created_at": application.created_at.isoformat() if application.created_at else None,
    }


@router.get("")
async def list_applications(db: Session = Depends(get_db)):
    """Lease applications, newest first."""
    applications = (
        db.query(LeaseApplication)
        .filter(LeaseApplication.is_deleted == False)
        .order_by(LeaseApplication.created_at.desc())
        .all()
    )
    return [application_to_dict(a) for a in applications]


@router.patch("/{application_id}")
async def mark_received(
    application_id: str, data: ReceivedUpdate, db: Session = Depends(get_db)
):
    application = (
        db.query(LeaseApplication)
        .filter(
            LeaseApplication.id == application_id,
            LeaseApplication.is_deleted == False,
        )
        .first()
    )
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    application.received = data.received
    db.commit()
    db.refresh(application)
    return application_to_dict(application)
