"""
Feelink API - main application
FastAPI application factory
"""

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.config import get_settings
from ..core.logging import FeelinkLogger, get_logger
from .dependencies import (
    get_activity_store,
    get_quota_store,
    get_session_store,
    shutdown_dependencies,
)
from .middleware import RequestLoggingMiddleware
from .routes import analysis_router, quota_router
from .schemas import APIInfoResponse, HealthResponse

FeelinkLogger.configure(get_settings().log_level)
logger = get_logger("api.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    settings = get_settings()

    logger.info(f"Feelink API v{__version__} starting...")
    logger.info(f"Remote classifier: {'on' if settings.huggingface.is_configured else 'off'}")
    logger.info(f"Remote classifier monthly limit: {settings.huggingface.monthly_limit}")
    logger.info(f"Quota store: {'redis' if settings.quota.redis_url else 'in-process'}")
    logger.info(f"Activities table: {settings.storage.activities_table or '(fallback bank only)'}")

    if settings.huggingface.enabled and not settings.huggingface.api_token:
        logger.warning("ENABLE_HF is set but HF_API_TOKEN is empty - remote classifier disabled")

    yield

    await shutdown_dependencies()

    logger.info("Feelink API shutting down...")


def create_app() -> FastAPI:
    """Create the FastAPI application"""
    application = FastAPI(
        title="Feelink API",
        description=(
            "Text emotion classifier with coping activity suggestions\n\n"
            "- keyword, sentiment and hosted-model ensemble\n"
            "- five categories: happy, sad, anxious, angry, neutral\n"
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # The chat UI is served from another origin
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["OPTIONS", "POST", "GET"],
        allow_headers=["Content-Type"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(analysis_router)
    application.include_router(quota_router)

    @application.get("/", response_model=APIInfoResponse)
    async def root() -> APIInfoResponse:
        """API info"""
        return APIInfoResponse(
            service="Feelink - text emotion classifier",
            version=__version__,
            description="Classifies text into an emotion and suggests a coping activity",
            features=[
                "Keyword voting (en, th)",
                "Sentiment scoring",
                "Hosted emotion model with monthly quota",
                "Activity suggestions",
            ],
        )

    @application.get("/v1/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check"""
        components = {
            "quota_store": await get_quota_store().health_check(),
            "activity_store": True,
            "session_store": True,
        }

        activity_store = get_activity_store()
        if activity_store is not None:
            try:
                await activity_store.find_by_emotion("neutral", limit=1)
            except Exception:
                components["activity_store"] = False

        try:
            components["session_store"] = await get_session_store().health_check()
        except Exception:
            components["session_store"] = False

        status = "healthy" if all(components.values()) else "degraded"

        return HealthResponse(
            status=status,
            timestamp=datetime.now(),
            version=__version__,
            components=components,
        )

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
