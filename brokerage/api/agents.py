"""
Public team API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from brokerage.db.database import get_db
from brokerage.db.models import Agent
from brokerage.formatting import format_phone, phone_tel_link

router = APIRouter()


def agent_to_response(agent: Agent) -> dict:
    """Convert Agent model to response dict with display-ready phone fields."""
    return {
        "id": agent.id,
        "slug": agent.slug or agent.id,
        "name": agent.name,
        "title": agent.title,
        "email": agent.email,
        "phone": agent.phone,
        "phone_display": format_phone(agent.phone),
        "phone_href": phone_tel_link(agent.phone) if agent.phone else None,
        "ext": agent.ext,
        "credentials": agent.credentials,
        "website": agent.website,
        "headshot": agent.headshot,
        "description": agent.description,
        "notable_deals": agent.notable_deals or [],
        "order": agent.order,
    }


@router.get("")
async def list_agents(db: Session = Depends(get_db)):
    """Team members in display order."""
    agents = (
        db.query(Agent)
        .filter(Agent.is_deleted == False)
        .order_by(Agent.order.asc(), Agent.name.asc())
        .all()
    )
    return {"agents": [agent_to_response(a) for a in agents], "total": len(agents)}


@router.get("/{slug_or_id}")
async def get_agent(slug_or_id: str, db: Session = Depends(get_db)):
    """Look up a team member by slug, falling back to id."""
    agent = (
        db.query(Agent)
        .filter(
            or_(Agent.slug == slug_or_id, Agent.id == slug_or_id),
            Agent.is_deleted == False,
        )
        .first()
    )
    if not agent:
        raise HTTPException(status_code=404, detail="Agent not found")
    return agent_to_response(agent)
