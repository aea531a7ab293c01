import logging
from fastapi import APIRouter
from typing import Dict, Any

from gta_insights import __version__
from gta_insights.services import genai_service

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint that reports on the status of the GenAI client.

    Returns:
        JSON with status information
    """
    genai_status = genai_service.get_genai_status()

    diagnostics = {
        "llm_initialized": genai_status["initialized"],
        "llm_error": genai_status["error"],
        "llm_model": genai_status["model"],
        "version": __version__,
    }

    if not genai_status["initialized"]:
        status = "degraded"
        logger.warning(f"Health check status: {status}. Diagnostics: {diagnostics}")
    else:
        status = "ok"
        logger.info(f"Health check status: {status}")

    return {"status": status, "diagnostics": diagnostics}
