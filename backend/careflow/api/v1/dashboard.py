"""Dashboard counters."""

from typing import Union

from fastapi import APIRouter, Depends

from careflow.core.dependencies import get_current_session, get_dashboard_service
from careflow.schemas.auth import AuthSession
from careflow.schemas.report import ProviderDashboard, RecipientDashboard
from careflow.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=Union[ProviderDashboard, RecipientDashboard])
async def dashboard_summary(
    session: AuthSession = Depends(get_current_session),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Provider: onboarding and review counts. Recipient: own report counts."""
    return dashboard.summary(session)
