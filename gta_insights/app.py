import logging
from contextlib import asynccontextmanager
from typing import Optional

# Import FastAPI components
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gta_insights import __version__
from gta_insights.config.settings import Settings, get_settings
from gta_insights.api.routers import insights_router, chat_router, health_router
from gta_insights.middleware.rate_limit import RateLimitMiddleware
from gta_insights.services import genai_service

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    # Reduce logging level for some noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Loading settings here makes a missing GEMINI_API_KEY fail at startup
    rather than on the first request.
    """
    settings = settings or get_settings()
    logger.info(f"Starting with {settings}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await genai_service.initialize_genai(settings.gemini_api_key, settings.gemini_model)
        logger.info("Application startup complete")
        yield
        logger.info("Application shutdown")

    app = FastAPI(
        title="GTA Insights",
        description="Urban-growth analytics and the Urbo assistant for the Greater Toronto Area",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # Add rate limiting middleware
    app.add_middleware(RateLimitMiddleware, requests_per_minute=settings.rate_limit_per_minute)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router, tags=["Health Check"])
    app.include_router(insights_router, prefix="/api", tags=["Insights"])
    app.include_router(chat_router, prefix="/api", tags=["Chat"])

    return app
