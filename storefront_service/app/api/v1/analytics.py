from fastapi import APIRouter

from storefront_service.app.api.dependencies import AnalyticsServiceDep
from storefront_service.app.schemas.analytics import AnalyticsSummary
from storefront_service.app.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics")


@router.get("/summary", response_model=AnalyticsSummary)
async def analytics_summary(service: AnalyticsService = AnalyticsServiceDep):
    return await service.summary()
