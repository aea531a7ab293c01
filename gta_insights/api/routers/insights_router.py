import logging
from fastapi import APIRouter, Depends

from gta_insights.models.schemas import FetchState, InsightsRequest
from gta_insights.services.controller import InsightsController, get_controller
from gta_insights.utils.error_handler import handle_error

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

@router.post("/insights", response_model=FetchState)
@handle_error
async def load_insights(request: InsightsRequest,
                        controller: InsightsController = Depends(get_controller)) -> FetchState:
    """
    Fetch the urban-growth analysis for a location and make it the current one.

    Classified model failures are returned with their HTTP status and a
    user-facing message; a request overtaken by a newer one gets 409.
    """
    return await controller.load_insights(request.location)

@router.post("/insights/retry", response_model=FetchState)
@handle_error
async def retry_insights(controller: InsightsController = Depends(get_controller)) -> FetchState:
    """Re-run the fetch for the current location."""
    return await controller.retry_insights()

@router.get("/insights", response_model=FetchState)
async def get_insights(controller: InsightsController = Depends(get_controller)) -> FetchState:
    """Current loading/success/error state of the insights view."""
    return controller.fetch_state
