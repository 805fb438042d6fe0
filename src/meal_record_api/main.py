"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meal_record_api.agents.llm import get_llm, get_llm_info
from meal_record_api.api.routes import meals
from meal_record_api.core.config import Settings, get_settings
from meal_record_api.core.exceptions import APIError
from meal_record_api.core.logging import configure_logging
from meal_record_api.db.mongo import MongoDB
from meal_record_api.db.repositories.meal_logs import MealLogRepository
from meal_record_api.models.meal import ErrorResponse
from meal_record_api.services.alerts import DiscordAlertNotifier
from meal_record_api.services.nutrition import LangChainModelGateway, NutritionPipeline

logger = logging.getLogger(__name__)


def build_pipeline(settings: Settings) -> NutritionPipeline | None:
    """
    Construct the pipeline and its collaborators from settings.

    Returns None when the LLM provider is not configured.
    """
    if not settings.is_llm_configured:
        logger.warning(
            f"LLM provider '{settings.llm_provider.value}' not configured; "
            "meal requests will be rejected"
        )
        return None

    gateway = LangChainModelGateway(get_llm(settings))

    meal_log = None
    if settings.meal_log_enabled:
        logger.info(f"Connecting to MongoDB at {settings.mongo_uri[:20]}...")
        MongoDB.connect(settings.mongo_uri, settings.db_name)
        meal_log = MealLogRepository(
            MongoDB.get_database()[settings.meal_log_collection]
        )

    alerts = None
    if settings.is_alerting_configured:
        alerts = DiscordAlertNotifier(settings.discord_webhook_url, timeout=settings.alert_timeout)
    else:
        logger.warning("Discord webhook not configured; upstream failures will not be alerted")

    return NutritionPipeline(gateway, meal_log=meal_log, alerts=alerts)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the pipeline collaborators on startup and releases them on shutdown.
    """
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"Starting {settings.app_name} v{settings.api_version}")

    app.state.pipeline = build_pipeline(settings)

    yield

    logger.info("Shutting down...")
    pipeline: NutritionPipeline | None = app.state.pipeline
    if pipeline is not None:
        await pipeline.wait_for_background()
        if pipeline.alerts is not None:
            await pipeline.alerts.close()
    MongoDB.close()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description="AI-powered nutrition estimation for meal records",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.pipeline = None

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                code=exc.status_code,
                message=exc.message,
                error=exc.details,
            ).model_dump(exclude_none=True),
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy" if app.state.pipeline is not None else "degraded",
            "service": settings.app_name,
            "version": settings.api_version,
            "mongodb": MongoDB.is_connected(),
            "llm": get_llm_info(settings),
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    # Include routers
    app.include_router(meals.router, prefix="/meals", tags=["Meals"])

    return app


# Create app instance
app = create_app()
