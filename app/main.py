"""Portfolio API — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.adapters.persistence.database import engine
from app.config import settings
from app.domain.errors import PortfolioError
from app.infrastructure.api.responses import CORS_HEADERS, error_response
from app.infrastructure.api.routes_contact import router as contact_router
from app.infrastructure.api.routes_health import router as health_router
from app.infrastructure.api.routes_visits import router as visits_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
            return error_response(exc.status_code, PortfolioError.default_message, exc)
        logger.info(
            "%s %s rejected (%d): %s",
            request.method, request.url.path, exc.status_code, exc.message,
        )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(400, "Invalid request")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, PortfolioError.default_message, exc)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Portfolio API",
        description="Visitor counter and contact form backend for the portfolio site",
        version="0.1.0",
        lifespan=lifespan,
    )

    # The static site may be served from any origin; every response is tagged
    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    _register_error_handlers(app)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(visits_router, prefix="/api")
    app.include_router(contact_router, prefix="/api")

    return app


app = create_app()
