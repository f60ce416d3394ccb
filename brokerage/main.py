"""
Main FastAPI application entry point.
"""

import logging

from fastapi import Depends, FastAPI
from sqlalchemy.orm import Session

from brokerage.api import router as api_router
from brokerage.config import get_settings
from brokerage.db.database import check_db, get_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Commercial real estate listings, team, news and investment calculators",
    version="0.1.0",
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for monitoring."""
    database = check_db(db)
    return {
        "status": "healthy" if database == "ok" else "degraded",
        "database": database,
        "version": "0.1.0",
    }
