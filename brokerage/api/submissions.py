"""
Public form submission endpoints: contact, newsletter, NDA and lease applications.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr
from sqlalchemy.orm import Session

from brokerage.config import get_settings
from brokerage.db.database import get_db
from brokerage.db.models import ContactMessage, LeaseApplication, NdaSubmission
from brokerage.formatting import digits_only

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _clean_or_none(value: Optional[str]) -> Optional[str]:
    return _clean(value) or None


# === Pydantic Schemas ===

class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None


class NewsletterRequest(BaseModel):
    email: EmailStr


class NdaRequest(BaseModel):
    listing_slug: Optional[str] = None
    listing_title: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    signature_name: Optional[str] = None
    acknowledged: bool = False


class CoApplicant(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    ssn: Optional[str] = None
    signature_name: Optional[str] = None


class LeaseApplicationRequest(BaseModel):
    listing_slug: Optional[str] = None
    listing_title: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    business_name: Optional[str] = None
    use: Optional[str] = None
    date_of_birth: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    ssn: Optional[str] = None
    business_plan_path: Optional[str] = None
    financials_paths: List[str] = []
    credit_check_acknowledged: bool = False
    signature_name: Optional[str] = None
    co_applicant: Optional[CoApplicant] = None


# === Endpoints ===

@router.post("/contact")
async def submit_contact(request: ContactRequest, db: Session = Depends(get_db)):
    """Store a contact-form message in the admin inbox."""
    name, email, message = _clean(request.name), _clean(request.email), _clean(request.message)
    if not name or not email or not message:
        raise HTTPException(
            status_code=400, detail="Name, email, and message are required"
        )

    contact = ContactMessage(
        name=name,
        email=email.lower(),
        phone=_clean_or_none(request.phone),
        service=_clean_or_none(request.service),
        message=message,
    )
    db.add(contact)
    db.commit()
    db.refresh(contact)

    logger.info(f"Contact message {contact.id} received from {contact.email}")
    return {"success": True, "id": contact.id}


@router.post("/newsletter")
async def newsletter_signup(request: NewsletterRequest):
    """Accept a newsletter sign-up; delivery is handled by the mailing provider."""
    logger.info(f"Newsletter signup: {request.email}")
    return {"success": True}


@router.post("/nda-submission")
async def submit_nda(request: NdaRequest, db: Session = Depends(get_db)):
    """Record a signed confidentiality agreement for a listing's financials."""
    required = [
        request.listing_slug,
        request.listing_title,
        request.first_name,
        request.last_name,
        request.email,
        request.signature_name,
    ]
    if not all(_clean(v) for v in required):
        raise HTTPException(status_code=400, detail="Missing required fields")

    if not request.acknowledged:
        raise HTTPException(
            status_code=400,
            detail="You must acknowledge the confidentiality agreement",
        )

    submission = NdaSubmission(
        listing_slug=_clean(request.listing_slug),
        listing_title=_clean(request.listing_title),
        first_name=_clean(request.first_name),
        last_name=_clean(request.last_name),
        email=_clean(request.email).lower(),
        phone=_clean_or_none(request.phone),
        company=_clean_or_none(request.company),
        signature_name=_clean(request.signature_name),
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)

    logger.info(f"NDA {submission.id} submitted for {submission.listing_slug}")
    return {"success": True, "id": submission.id}


@router.post("/lease-application")
async def submit_lease_application(
    request: LeaseApplicationRequest, db: Session = Depends(get_db)
):
    """Record a lease application; the application fee is collected afterwards."""
    first_name = _clean(request.first_name)
    last_name = _clean(request.last_name)
    email = _clean(request.email)
    signature_name = _clean(request.signature_name)

    co = request.co_applicant
    has_co_applicant = co is not None and bool(
        _clean(co.first_name) or _clean(co.last_name)
    )

    if not first_name or not last_name or not email or not signature_name:
        raise HTTPException(
            status_code=400,
            detail="First name, last name, email, and signature are required.",
        )
    if not request.credit_check_acknowledged:
        raise HTTPException(
            status_code=400,
            detail="You must acknowledge the background and credit check permission.",
        )
    if has_co_applicant and not _clean(co.signature_name):
        raise HTTPException(
            status_code=400,
            detail="Co-applicant signature is required when a co-applicant is added.",
        )
    if not _clean(request.listing_slug) or not _clean(request.listing_title):
        raise HTTPException(status_code=400, detail="Invalid listing.")

    co_applicant = None
    if has_co_applicant:
        co_applicant = {
            "first_name": _clean(co.first_name),
            "last_name": _clean(co.last_name),
            "date_of_birth": _clean_or_none(co.date_of_birth),
            "phone": _clean_or_none(co.phone),
            "email": _clean_or_none(co.email),
            "ssn": digits_only(_clean(co.ssn)) or None,
            "signature_name": _clean(co.signature_name),
        }

    application = LeaseApplication(
        listing_slug=_clean(request.listing_slug),
        listing_title=_clean(request.listing_title),
        first_name=first_name,
        last_name=last_name,
        business_name=_clean_or_none(request.business_name),
        use=_clean_or_none(request.use),
        date_of_birth=_clean_or_none(request.date_of_birth),
        phone=_clean_or_none(request.phone),
        email=email,
        ssn=digits_only(_clean(request.ssn)) or None,
        business_plan_path=_clean_or_none(request.business_plan_path),
        financials_paths=[p for p in request.financials_paths if p.strip()],
        credit_check_acknowledged=True,
        signature_name=signature_name,
        co_applicant=co_applicant,
        application_fee_cents=settings.application_fee_cents,
        payment_status="pending",
    )
    db.add(application)
    db.commit()
    db.refresh(application)

    logger.info(
        f"Lease application {application.id} submitted for {application.listing_slug}"
    )
    return {
        "success": True,
        "message": "Application submitted successfully.",
        "application_id": application.id,
        "payment_required": True,
    }
