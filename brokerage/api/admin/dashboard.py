"""
Admin lookups: listing feature options and sidebar notification counts.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from brokerage.db.database import get_db
from brokerage.db.models import ContactMessage, FeatureOption, LeaseApplication

router = APIRouter()


@router.get("/feature-options")
async def list_feature_options(db: Session = Depends(get_db)):
    options = db.query(FeatureOption).order_by(FeatureOption.label.asc()).all()
    return [{"id": o.id, "label": o.label} for o in options]


@router.get("/notifications")
async def notification_counts(db: Session = Depends(get_db)):
    """Unread messages and lease applications not yet marked received."""
    unread_messages = (
        db.query(ContactMessage)
        .filter(ContactMessage.read == False, ContactMessage.is_deleted == False)
        .count()
    )
    applications = (
        db.query(LeaseApplication)
        .filter(LeaseApplication.received == False, LeaseApplication.is_deleted == False)
        .count()
    )
    return {"unread_messages": unread_messages, "applications": applications}
