"""Interaction tracking endpoints"""

from fastapi import APIRouter

from storefront_service.app.api.dependencies import TrackingSinkDep
from storefront_service.app.schemas.tracking import ImpressionRequest, SuccessResponse
from storefront_service.app.services.tracking_service import TrackingSink

router = APIRouter()


@router.post("/impressions", response_model=SuccessResponse)
async def track_impression(
    body: ImpressionRequest,
    tracking_sink: TrackingSink = TrackingSinkDep,
):
    await tracking_sink.record_impression(body.product_id)
    return SuccessResponse()
