"""Itinerary construction API."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import require_service_secret
from app.core.logger import get_logger
from app.schemas.itinerary import ItineraryRequest, ItineraryResponse
from app.services.itinerary_service import ItineraryGenerationError, run_itinerary_pipeline

router = APIRouter(prefix="/api/v1", tags=["itineraries"])
logger = get_logger(__name__)

ITINERARY_ERROR_EXAMPLES = {
    401: {
        "invalid_secret": {
            "summary": "Service secret mismatch",
            "description": "The x-service-secret header is missing or wrong",
            "value": {"detail": "Invalid service secret."},
        },
    },
    422: {
        "no_plans": {
            "summary": "No plans produced",
            "description": "The candidate pools could not fill any plan",
            "value": {"detail": "No venues selected for plans."},
        },
    },
}


@router.post(
    "/itineraries",
    response_model=ItineraryResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_service_secret)],
    responses={
        401: {
            "description": "Authentication failed",
            "content": {"application/json": {"examples": ITINERARY_ERROR_EXAMPLES[401]}},
        },
        422: {
            "description": "Itinerary could not be built",
            "content": {"application/json": {"examples": ITINERARY_ERROR_EXAMPLES[422]}},
        },
    },
)
async def create_itinerary(request: ItineraryRequest) -> ItineraryResponse:
    """Build plan variants, backups and the swap menu for one outing."""
    logger.info(
        "Itinerary request received: city=%s budget=%.2f %s party_size=%d candidates=%d",
        request.city,
        request.budget.amount,
        request.budget.currency,
        request.party_size,
        request.candidate_pools.total(),
    )
    try:
        return await run_itinerary_pipeline(request)
    except ItineraryGenerationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
