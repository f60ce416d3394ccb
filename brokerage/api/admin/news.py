"""
Admin news management endpoints.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from brokerage.api.news import news_to_response
from brokerage.db.database import get_db
from brokerage.db.models import News, NewsLink
from brokerage.services.slugs import unique_slug

logger = logging.getLogger(__name__)
router = APIRouter()


class LinkInput(BaseModel):
    label: Optional[str] = None
    url: Optional[str] = None


class NewsCreate(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    published_at: Optional[datetime] = None
    links: List[LinkInput] = []


class NewsUpdate(NewsCreate):
    links: Optional[List[LinkInput]] = None


def build_links(links: List[LinkInput]) -> List[NewsLink]:
    """Keep links with both a label and a URL, numbered in the order given."""
    complete = [
        link for link in links
        if (link.label or "").strip() and (link.url or "").strip()
    ]
    return [
        NewsLink(label=link.label.strip(), url=link.url.strip(), order=i)
        for i, link in enumerate(complete)
    ]


def get_news_or_404(db: Session, news_id: str) -> News:
    news = db.query(News).filter(News.id == news_id, News.is_deleted == False).first()
    if not news:
        raise HTTPException(status_code=404, detail="News post not found")
    return news


@router.get("")
async def list_news(db: Session = Depends(get_db)):
    """All posts, newest first."""
    rows = (
        db.query(News)
        .filter(News.is_deleted == False)
        .order_by(News.created_at.desc())
        .all()
    )
    return [news_to_response(n) for n in rows]


@router.post("", status_code=201)
async def create_news(data: NewsCreate, db: Session = Depends(get_db)):
    """Create a post; the slug is made unique with a numeric suffix."""
    title = (data.title or "").strip() or "Untitled"
    slug_source = (data.slug or "").strip() or (data.title or "untitled")

    news = News(
        slug=unique_slug(db, News, slug_source),
        title=title,
        excerpt=(data.excerpt or "").strip() or None,
        content=(data.content or "").strip(),
        image_url=(data.image_url or "").strip() or None,
        published_at=data.published_at,
        links=build_links(data.links),
    )
    db.add(news)
    db.commit()
    db.refresh(news)

    logger.info(f"News {news.id} created ({news.slug})")
    return news_to_response(news)


@router.get("/{news_id}")
async def get_news(news_id: str, db: Session = Depends(get_db)):
    return news_to_response(get_news_or_404(db, news_id))


@router.patch("/{news_id}")
async def update_news(news_id: str, data: NewsUpdate, db: Session = Depends(get_db)):
    """Update a post; sending links replaces the whole list."""
    news = get_news_or_404(db, news_id)
    fields = data.model_dump(exclude_unset=True)

    if "title" in fields:
        news.title = (data.title or "").strip() or "Untitled"
    if fields.get("slug") and data.slug.strip() != news.slug:
        news.slug = unique_slug(db, News, data.slug)
    if "excerpt" in fields:
        news.excerpt = (data.excerpt or "").strip() or None
    if "content" in fields:
        news.content = (data.content or "").strip()
    if "image_url" in fields:
        news.image_url = (data.image_url or "").strip() or None
    if "published_at" in fields:
        news.published_at = data.published_at
    if data.links is not None:
        news.links.clear()
        db.flush()
        news.links.extend(build_links(data.links))

    db.commit()
    db.refresh(news)
    return news_to_response(news)


@router.delete("/{news_id}")
async def delete_news(news_id: str, db: Session = Depends(get_db)):
    """Soft delete a post."""
    news = get_news_or_404(db, news_id)
    news.is_deleted = True
    db.commit()

    logger.info(f"News {news.id} deleted")
    return {"deleted": True, "id": news_id}
