"""
CareFlow FastAPI Backend Application

Main application entry point for the clinical report workflow API.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from careflow.api import router
from careflow.core.config import Settings, get_settings
from careflow.core.database import Store
from careflow.core.exceptions import CareFlowError, ValidationFailed
from careflow.schemas.common import ErrorResponse, HealthCheck
from careflow.services.seed_service import seed_demo_data

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None, store: Optional[Store] = None
) -> FastAPI:
    """
    Build an application bound to its own store.

    Args:
        settings: Defaults to the cached environment settings
        store: Defaults to a store on ``settings.DATABASE_URL``

    Returns:
        Configured FastAPI app; tables and demo data are set up at startup
    """
    settings = settings or get_settings()
    configure_logging(settings)
    store = store or Store.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.init_db()
        if settings.seed_demo_data:
            with store.session_scope() as db:
                seed_demo_data(db, settings)
        logger.info(f"{settings.app_name} v{settings.app_version} started")
        yield
        logger.info(f"Shutting down {settings.app_name}")
        store.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Role-based clinical report workflow: onboarding, review and approval",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(CareFlowError)
    async def careflow_error_handler(request: Request, exc: CareFlowError):
        logger.warning(
            f"{request.method} {request.url.path} refused: {exc.code} ({exc.message})"
        )
        body = ErrorResponse(
            error=exc.code, detail=exc.message, status_code=exc.status_code
        )
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            ".".join(str(part) for part in error["loc"]) + ": " + error["msg"]
            for error in exc.errors()
        )
        logger.warning(f"{request.method} {request.url.path} invalid input: {problems}")
        body = ErrorResponse(
            error=ValidationFailed.code,
            detail=problems,
            status_code=ValidationFailed.status_code,
        )
        return JSONResponse(
            status_code=ValidationFailed.status_code, content=body.model_dump()
        )

    # Include API routes
    app.include_router(router, prefix="/api")

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "message": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
            "api_v1": "/api/v1",
        }

    @app.get("/health", response_model=HealthCheck, tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return HealthCheck(
            status="healthy", version=settings.app_version, timestamp=datetime.now()
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "careflow.main:app", host=settings.host, port=settings.port, reload=settings.debug
    )
