"""
Back-office routes. Every route here requires the admin session.
"""

from fastapi import APIRouter, Depends

from brokerage.api.admin import agents, applications, dashboard, inbox, listings, ndas, news
from brokerage.auth.dependencies import require_admin

router = APIRouter(dependencies=[Depends(require_admin)])

router.include_router(listings.router, prefix="/listings")
router.include_router(agents.router, prefix="/agents")
router.include_router(news.router, prefix="/news")
router.include_router(inbox.router, prefix="/messages")
router.include_router(ndas.router, prefix="/ndas")
router.include_router(applications.router, prefix="/lease-applications")
router.include_router(dashboard.router)
