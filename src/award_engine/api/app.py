"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from award_engine import __version__
from award_engine.api.routes import calculate_router, health_router
from award_engine.award.loader import ConfigLoader
from award_engine.award.tables import AwardConfig
from award_engine.calculators.engine import AwardEngine
from award_engine.config import Settings, get_settings
from award_engine.errors import (
    ClassificationNotFound,
    EngineError,
    RateNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)


def status_for(exc: EngineError) -> int:
    """HTTP status for an engine error."""
    if isinstance(exc, (ValidationError, ClassificationNotFound)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, RateNotFound):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_details(exc: EngineError) -> dict[str, str] | None:
    """Structured fields carried by the error, if any."""
    fields = {
        key: str(value)
        for key, value in vars(exc).items()
        if not key.startswith("_") and key != "message"
    }
    return fields or None


def create_app(
    award_config: AwardConfig | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The award configuration is loaded once here and shared read-only by
    every request.
    """
    settings = settings or get_settings()
    if award_config is None:
        award_config = ConfigLoader.load(settings.award_config_path)

    app = FastAPI(
        title="Award Engine API",
        description="Award interpretation engine - Aged Care Award 2010 (MA000018)",
        version=__version__,
    )
    app.state.settings = settings
    app.state.award_config = award_config
    app.state.engine = AwardEngine(
        award_config,
        engine_version=settings.engine_version,
        threshold=settings.daily_overtime_threshold,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(EngineError)
    async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
        """Map engine errors to status codes."""
        status_code = status_for(exc)
        logger.warning("Calculation failed with %s: %s", exc.code, exc)
        return JSONResponse(
            status_code=status_code,
            content={"code": exc.code, "message": str(exc), "details": error_details(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed or incomplete request bodies are client errors."""
        logger.warning("Rejected request body: %s", exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "code": "VALIDATION_ERROR",
                "message": "Request body failed validation",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": None,
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(calculate_router)

    return app
