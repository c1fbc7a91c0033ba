"""
FastAPI Application Factory.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload

    # Production
    uvicorn api.app:app --host 0.0.0.0 --port 8787

    # Tests (inject fakes)
    from api.app import create_app
    app = create_app(container=build_container(settings, store=InMemoryDocumentStore(), ...))
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import ServiceContainer, build_container
from core.errors import ServiceError
from core.logging import configure_logging, get_logger
from core.middleware import RequestTracingMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = app.state.container.settings

    configure_logging(
        json_logs=settings.is_production,
        log_level="DEBUG" if settings.debug else "INFO",
    )

    logger.info(
        "Starting style match API",
        environment=settings.environment,
        port=settings.port,
        embed_model=settings.openai_embed_model,
        data_dir=str(settings.data_dir),
        pinterest_connected=app.state.container.session.connected,
    )

    yield

    logger.info("Shutting down style match API")


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", error=exc.message, status_code=exc.status_code)
    else:
        logger.info("Request rejected", error=exc.message, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        message = "Invalid JSON body."
    else:
        message = "Invalid request."
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in errors
    ]
    return JSONResponse(status_code=400, content={"error": message, "details": details})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse(
        status_code=500,
        content={"error": "Unexpected error while handling request.", "message": str(exc)},
    )


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Pre-built services. Defaults to build_container() from
            environment settings.

    Returns:
        Configured FastAPI application
    """
    container = container or build_container()
    settings = container.settings

    app = FastAPI(
        title="Pinterest Style Match API",
        description="""
        Ranks a product catalog by how well each product matches the style of
        a Pinterest board.

        ## Flow

        1. `POST /api/pinterest/token` - connect a Pinterest credential
        2. `GET /api/pinterest/boards` - pick a board
        3. `POST /api/pinterest/import-board` - import and classify its pins
        4. `POST /api/ai/rank-products` - rank products against the board
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.state.container = container

    # =========================================================================
    # Middleware (order matters - first added = innermost)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestTracingMiddleware)

    # =========================================================================
    # Error handling
    # =========================================================================

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # =========================================================================
    # Routes
    # =========================================================================

    from api.routes.health import router as health_router
    app.include_router(health_router)

    from api.routes.pinterest import router as pinterest_router
    app.include_router(pinterest_router)

    from api.routes.ranking import router as ranking_router
    app.include_router(ranking_router)

    return app


def get_app() -> FastAPI:
    """Factory for ASGI servers: ``uvicorn api.app:get_app --factory``."""
    return create_app()


# Usage: uvicorn api.app:app
app = create_app()
