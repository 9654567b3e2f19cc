"""
FastAPI application factory.

One EstimatorService (catalog store plus price table) lives for the lifetime
of the application; it is not persisted and not shared across worker
processes.
"""
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings, get_settings
from internal.infrastructure.seed import seed_categories, seed_prices
from internal.transport.http.metrics import MetricsMiddleware
from internal.transport.http.v1.handlers import router, set_dependencies
from internal.usecase.catalog_store import ImageDefaults
from internal.usecase.estimator_service import EstimatorService
from pkg.logger.logger import get_logger, set_request_id

logger = get_logger(__name__)


def build_service(settings: Settings) -> EstimatorService:
    """
    Create the estimator service, seeded when configured.

    Args:
        settings: Application settings.

    Returns:
        Ready-to-use service.
    """
    image_defaults = ImageDefaults(
        category=settings.default_category_image,
        option=settings.default_option_image,
        size=settings.default_size_image,
    )
    categories = seed_categories() if settings.seed_catalog else []
    service = EstimatorService.create(categories, image_defaults=image_defaults)
    if settings.seed_catalog:
        seed_prices(service)
    logger.info(
        "Estimator service built",
        categories=len(categories),
        seeded=settings.seed_catalog,
    )
    return service


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings override; environment settings when omitted.

    Returns:
        Configured application. The service is wired in by the lifespan.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting Furniture Estimator API...")
        set_dependencies(service=build_service(settings))
        logger.info("Furniture Estimator API started successfully")

        yield

        logger.info("Shutting down Furniture Estimator API...")
        set_dependencies(service=None)

    app = FastAPI(
        title="Furniture Estimator API",
        description="Catalog administration and price estimation for furniture",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(MetricsMiddleware)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next) -> Response:
        """Add request ID to context for logging and tracing."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        set_request_id(request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with service information."""
        return {
            "service": settings.app_name,
            "version": "1.0.0",
            "status": "running",
        }

    return app
