"""
FastAPI application entry point.
Mounts REST and GraphQL routes, Prometheus metrics, and the engine client lifespan.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from catalog_search.api.graphql.schema import graphql_router
from catalog_search.api.v1.router import api_router
from catalog_search.config import get_settings
from catalog_search.core.exceptions import (
    CatalogSearchError,
    EngineRejectedError,
    EngineUnavailableError,
    NotFoundError,
    ValidationError,
)
from catalog_search.search.client import create_search_client
from catalog_search.search.mappings import document_index_mappings, document_index_settings
from catalog_search.search.schema_manager import ensure_index

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create the engine client and ensure the index. Shutdown: close the client."""
    settings = get_settings()
    client = create_search_client(settings)
    app.state.search_client = client
    try:
        await ensure_index(
            client,
            settings.search_index,
            document_index_mappings(),
            document_index_settings(),
        )
    except CatalogSearchError as e:
        # Engine may be down at boot; /health reports it and requests fail with 503
        logger.warning("Index check failed at startup: %s", e)
    yield
    await client.close()


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy to HTTP status codes for the REST surface."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors},
        )

    @app.exception_handler(EngineUnavailableError)
    async def unavailable_handler(request: Request, exc: EngineUnavailableError):
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)

    @app.exception_handler(EngineRejectedError)
    async def rejected_handler(request: Request, exc: EngineRejectedError):
        return _error_response(status.HTTP_502_BAD_GATEWAY, exc)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        description="Search facade: index mapping, CRUD, search, suggestions and recommendations over an Elasticsearch-compatible engine.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")
    app.include_router(graphql_router, prefix="/graphql")

    return app


app = create_app()
