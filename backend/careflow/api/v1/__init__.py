"""
API v1 routes aggregation.
"""

from fastapi import APIRouter
from careflow.api.v1.auth import router as auth_router
from careflow.api.v1.recipients import router as recipients_router
from careflow.api.v1.reports import router as reports_router
from careflow.api.v1.dashboard import router as dashboard_router

router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(auth_router)
router.include_router(recipients_router)
router.include_router(reports_router)
router.include_router(dashboard_router)
