"""
Slug helpers shared by listings and news posts.
"""

from sqlalchemy.orm import Session

from brokerage.formatting import slugify


def unique_slug(db: Session, model, text: str, fallback: str = "untitled") -> str:
    """
    Slugify text and make it unique for the model's slug column.

    Collisions get "-1", "-2", ... appended in order.
    """
    base = slugify(text) or fallback
    slug = base
    n = 1
    while db.query(model).filter(model.slug == slug).first() is not None:
        slug = f"{base}-{n}"
        n += 1
    return slug
