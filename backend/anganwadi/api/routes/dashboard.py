"""Dashboard route for the admin panel."""

from typing import Annotated

from anganwadi.api.dependencies import get_dashboard_service, require_admin
from anganwadi.core.logging import logger
from anganwadi.schemas.programs import DashboardStats
from anganwadi.services.dashboard import DashboardService
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

router = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard-stats",
    response_model=DashboardStats,
    dependencies=[Depends(require_admin)],
)
async def dashboard_stats(
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
):
    """Return total programs, programs this month and the newest program's date."""

    try:
        return await dashboard_service.get_stats()
    except Exception:
        logger.exception("Error computing dashboard stats")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to load stats"},
        )
