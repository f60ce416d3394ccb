"""
API routes for the brokerage site.
"""

from fastapi import APIRouter

from brokerage.api import agents, auth, calculations, listings, news, submissions
from brokerage.api.admin import router as admin_router

router = APIRouter()

# Include sub-routers
router.include_router(listings.router, prefix="/listings", tags=["listings"])
router.include_router(agents.router, prefix="/agents", tags=["agents"])
router.include_router(news.router, prefix="/news", tags=["news"])
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(submissions.router, tags=["submissions"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin_router, prefix="/admin", tags=["admin"])
