"""
Public news API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from brokerage.db.database import get_db
from brokerage.db.models import News

router = APIRouter()


def news_to_response(news: News) -> dict:
    """Convert News model to response dict."""
    return {
        "id": news.id,
        "slug": news.slug,
        "title": news.title,
        "excerpt": news.excerpt,
        "content": news.content,
        "image_url": news.image_url,
        "published_at": news.published_at.isoformat() if news.published_at else None,
        "created_at": news.created_at.isoformat() if news.created_at else None,
        "links": [
            {"id": link.id, "label": link.label, "url": link.url, "order": link.order}
            for link in news.links
        ],
    }


@router.get("")
async def list_news(db: Session = Depends(get_db)):
    """News posts, most recently published first."""
    rows = (
        db.query(News)
        .filter(News.is_deleted == False)
        .order_by(News.published_at.desc(), News.created_at.desc())
        .all()
    )
    return {"news": [news_to_response(n) for n in rows], "total": len(rows)}


@router.get("/{slug}")
async def get_news(slug: str, db: Session = Depends(get_db)):
    """A single news post."""
    news = db.query(News).filter(News.slug == slug, News.is_deleted == False).first()
    if not news:
        raise HTTPException(status_code=404, detail="News post not found")
    return news_to_response(news)
