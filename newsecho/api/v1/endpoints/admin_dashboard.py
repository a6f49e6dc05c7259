"""Admin dashboard summary."""

from typing import Annotated

from fastapi import APIRouter, Depends

from newsecho.api.v1.dependencies import get_dashboard_service
from newsecho.application.services import DashboardService
from newsecho.schemas.dashboard import DashboardResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    dashboard: Annotated[DashboardService, Depends(get_dashboard_service)],
):
    """Totals with week-over-week growth, recent newsletters and 7-day reply engagement."""
    return DashboardResponse.model_validate(await dashboard.summary())
