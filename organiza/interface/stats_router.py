"""Dashboard statistics route."""

from typing import Annotated

from fastapi import APIRouter, Depends

from organiza.core.errors import StorageError
from organiza.interface.dependencies import CurrentUser, get_stats_service, raise_http_error
from organiza.models.service_models import DashboardStats
from organiza.services.stats_service import StatsService


router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
async def get_stats(
    current_user: CurrentUser,
    stats: Annotated[StatsService, Depends(get_stats_service)],
) -> DashboardStats:
    """Counts, priority breakdown and weekly completions (most recent week first)."""
    try:
        return await stats.get_dashboard_stats(current_user.id)
    except StorageError as e:
        raise_http_error(e)
