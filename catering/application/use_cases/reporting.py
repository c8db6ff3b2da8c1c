"""Reporting use cases: dashboard figures and cross-entity search."""

from datetime import date

from catering.application.dto.responses import (
    DashboardStatsResponse,
    InventoryItemResponse,
    MenuItemResponse,
    OrderResponse,
    SearchResponse,
)
from catering.core.interfaces.report_store import (
    DashboardStats,
    IReportStore,
    SearchResults,
)

MIN_QUERY_LENGTH = 2
RESULTS_PER_KIND = 5


class _ReportUseCase:
    def __init__(self, report_store: IReportStore | None = None):
        self._report_store = report_store

    async def _get_report_store(self) -> IReportStore:
        if self._report_store is None:
            from catering.infrastructure.storage.sqlite import get_report_store

            self._report_store = await get_report_store()
        return self._report_store


class GetDashboardStatsUseCase(_ReportUseCase):
    """Headline figures for a business as of today."""

    async def execute(self, business_id: int, today: date | None = None) -> DashboardStats:
        store = await self._get_report_store()
        return await store.dashboard_stats(business_id, today or date.today())

    def to_response(self, stats: DashboardStats) -> DashboardStatsResponse:
        return DashboardStatsResponse(
            pending_orders=stats.pending_orders,
            upcoming_events=stats.upcoming_events,
            low_stock_items=stats.low_stock_items,
            inventory_value=stats.inventory_value,
            monthly_revenue=stats.monthly_revenue,
            total_sales=stats.total_sales,
        )


class SearchRecordsUseCase(_ReportUseCase):
    """Search orders, menu items and inventory; short queries match nothing."""

    async def execute(self, business_id: int, query: str | None) -> SearchResults:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return SearchResults()
        store = await self._get_report_store()
        return await store.search(business_id, query, limit=RESULTS_PER_KIND)

    def to_response(self, query: str | None, results: SearchResults) -> SearchResponse:
        return SearchResponse(
            query=query or "",
            orders=[OrderResponse.from_entity(o) for o in results.orders],
            menu_items=[MenuItemResponse.from_entity(m) for m in results.menu_items],
            inventory=[InventoryItemResponse.from_entity(i) for i in results.inventory],
        )
