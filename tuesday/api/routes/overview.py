from fastapi import APIRouter, Depends, Query

from tuesday.api.deps import get_overview_service
from tuesday.schemas.overview import WeeklyOverviewResponse
from tuesday.services.overview_service import OverviewService

router = APIRouter()


@router.get("/weekly", response_model=WeeklyOverviewResponse)
async def weekly_overview(
    user_id: int | None = Query(default=None, alias="userId"),
    week_start: str | None = Query(default=None, alias="weekStart"),
    service: OverviewService = Depends(get_overview_service),
):
    return await service.weekly_overview(user_id, week_start)
