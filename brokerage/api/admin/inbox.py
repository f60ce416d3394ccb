"""
Admin inbox for contact-form messages.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from brokerage.db.database import get_db
from brokerage.db.models import ContactMessage

router = APIRouter()


class MarkReadRequest(BaseModel):
    read: bool = True


def message_to_dict(message: ContactMessage) -> dict:
    return {
        "id": message.id,
        "name": message.name,
        "email": message.email,
        "phone": message.phone,
        "service": message.service,
        "message": message.message,
        "read": message.read,
        "created_at": message.created_at.isoformat() if message.created_at else None,
    }


@router.get("")
async def list_messages(db: Session = Depends(get_db)):
    """Contact messages, newest first."""
    messages = (
        db.query(ContactMessage)
        .filter(ContactMessage.is_deleted == False)
        .order_by(ContactMessage.created_at.desc())
        .all()
    )
    return [message_to_dict(m) for m in messages]


@router.patch("/{message_id}")
async def mark_message(
    message_id: str, data: MarkReadRequest, db: Session = Depends(get_db)
):
    message = (
        db.query(ContactMessage)
        .filter(ContactMessage.id == message_id, ContactMessage.is_deleted == False)
        .first()
    )
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")

    message.read = data.read
    db.commit()
    db.refresh(message)
    return message_to_dict(message)
