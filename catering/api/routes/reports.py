"""Dashboard and search endpoints."""

from fastapi import APIRouter, Depends

from catering.api.dependencies import (
    get_business_id,
    get_dashboard_stats_use_case,
    get_search_records_use_case,
)
from catering.application.dto.responses import DashboardStatsResponse, SearchResponse
from catering.application.use_cases import GetDashboardStatsUseCase, SearchRecordsUseCase

router = APIRouter(prefix="/api", tags=["reports"])


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    business_id: int = Depends(get_business_id),
    use_case: GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
) -> DashboardStatsResponse:
    """Pending orders, upcoming events, stock and revenue figures."""
    stats = await use_case.execute(business_id)
    return use_case.to_response(stats)


@router.get("/search", response_model=SearchResponse)
async def search(
    q: str | None = None,
    business_id: int = Depends(get_business_id),
    use_case: SearchRecordsUseCase = Depends(get_search_records_use_case),
) -> SearchResponse:
    """Search orders, menu items and inventory (at least 2 characters)."""
    results = await use_case.execute(business_id, q)
    return use_case.to_response(q, results)
