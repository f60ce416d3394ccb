"""
Admin team management endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from brokerage.api.agents import agent_to_response
from brokerage.db.database import get_db
from brokerage.db.models import Agent
from brokerage.formatting import parse_formatted_phone, slugify
from brokerage.services.slugs import unique_slug

logger = logging.getLogger(__name__)
router = APIRouter()


class AgentCreate(BaseModel):
    name: str
    email: str
    title: Optional[str] = None
    phone: Optional[str] = None
    ext: Optional[str] = None
    credentials: Optional[str] = None
    website: Optional[str] = None
    headshot: Optional[str] = None
    description: Optional[str] = None
    notable_deals: List[str] = []


class AgentUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    title: Optional[str] = None
    phone: Optional[str] = None
    ext: Optional[str] = None
    credentials: Optional[str] = None
    website: Optional[str] = None
    headshot: Optional[str] = None
    description: Optional[str] = None
    notable_deals: Optional[List[str]] = None
    order: Optional[int] = None


class ReorderRequest(BaseModel):
    agent_ids: List[str]


def active_agents(db: Session):
    return db.query(Agent).filter(Agent.is_deleted == False)


def get_agent_or_404(db: Session, agent_id: str) -> Agent:
    agent = active_agents(db).filter(Agent.id == agent_id).first()
    if not agent:
        raise HTTPException(status_code=404, detail="Agent not found")
    return agent


def ordered_agents(db: Session) -> List[dict]:
    agents = active_agents(db).order_by(Agent.order.asc(), Agent.name.asc()).all()
    return [agent_to_response(a) for a in agents]


@router.get("")
async def list_agents(db: Session = Depends(get_db)):
    """All agents in display order."""
    return ordered_agents(db)


@router.post("", status_code=201)
async def create_agent(data: AgentCreate, db: Session = Depends(get_db)):
    """Add an agent at the end of the team list."""
    if not data.name.strip() or not data.email.strip():
        raise HTTPException(status_code=400, detail="Name and email are required")

    last = active_agents(db).order_by(Agent.order.desc()).first()
    agent = Agent(
        name=data.name.strip(),
        slug=unique_slug(db, Agent, data.name, fallback="agent"),
        email=data.email.strip().lower(),
        title=data.title or None,
        phone=parse_formatted_phone(data.phone or "") or None,
        ext=data.ext or None,
        credentials=data.credentials or None,
        website=data.website or None,
        headshot=data.headshot or None,
        description=data.description or None,
        notable_deals=[d for d in data.notable_deals if d.strip()],
        order=(last.order + 1) if last else 0,
    )
    db.add(agent)
    db.commit()
    db.refresh(agent)

    logger.info(f"Agent {agent.id} created ({agent.name})")
    return agent_to_response(agent)


@router.post("/reorder")
async def reorder_agents(data: ReorderRequest, db: Session = Depends(get_db)):
    """Set display order from the position of each id in agent_ids."""
    if not data.agent_ids:
        raise HTTPException(status_code=400, detail="agent_ids array required")

    agents = {a.id: a for a in active_agents(db).filter(Agent.id.in_(data.agent_ids))}
    missing = [agent_id for agent_id in data.agent_ids if agent_id not in agents]
    if missing:
        raise HTTPException(status_code=404, detail=f"Agent not found: {missing[0]}")

    for index, agent_id in enumerate(data.agent_ids):
        agents[agent_id].order = index
    db.commit()

    return ordered_agents(db)


@router.patch("/{agent_id}")
async def update_agent(agent_id: str, data: AgentUpdate, db: Session = Depends(get_db)):
    """Update only the fields provided; blank optional fields are cleared."""
    agent = get_agent_or_404(db, agent_id)
    fields = data.model_dump(exclude_unset=True)

    for field, value in fields.items():
        if field in ("name", "email", "order", "notable_deals"):
            if value is not None:
                setattr(agent, field, value)
        elif field == "phone":
            agent.phone = parse_formatted_phone(value or "") or None
        else:
            setattr(agent, field, value or None)

    if "name" in fields and fields["name"] and not agent.slug:
        agent.slug = unique_slug(db, Agent, slugify(fields["name"]), fallback="agent")

    db.commit()
    db.refresh(agent)
    return agent_to_response(agent)


@router.delete("/{agent_id}")
async def delete_agent(agent_id: str, db: Session = Depends(get_db)):
    """Soft delete an agent and drop them from every listing."""
    agent = get_agent_or_404(db, agent_id)
    for link in list(agent.listings):
        db.delete(link)
    agent.is_deleted = True
    db.commit()

    logger.info(f"Agent {agent.id} deleted")
    return {"deleted": True, "id": agent_id}
