import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, get_settings, require_api_key
from .mcp.dispatcher import Dispatcher
from .routes.account import router as account_router
from .routes.batches import router as batches_router
from .routes.carriers import router as carriers_router
from .routes.downloads import router as downloads_router
from .routes.health import router as health_router
from .routes.inventory import router as inventory_router
from .routes.labels import router as labels_router
from .routes.manifests import router as manifests_router
from .routes.packages import router as packages_router
from .routes.pickups import router as pickups_router
from .routes.rates import router as rates_router
from .routes.shipments import router as shipments_router
from .routes.tags import router as tags_router
from .routes.warehouses import router as warehouses_router
from .routes.webhooks import router as webhooks_router
from .services.shipstation import ShipStationClient
from .utils.central_logging import setup_central_logging
from .utils.errors import ConfigurationError, GatewayError, UpstreamError, error_payload
from .utils.logging_middleware import LoggingMiddleware

logger = logging.getLogger("shipstation.api")

API_ROUTERS = [
    shipments_router,
    labels_router,
    rates_router,
    carriers_router,
    warehouses_router,
    inventory_router,
    batches_router,
    manifests_router,
    packages_router,
    pickups_router,
    tags_router,
    webhooks_router,
    account_router,
    downloads_router,
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("ShipStation API server ready | upstream=%s", app.state.dispatcher.client.base_url)
    yield
    await app.state.dispatcher.client.close()


def create_app(settings: Optional[Settings] = None, client: Optional[ShipStationClient] = None) -> FastAPI:
    """Build the REST front end. Without an explicit client one is made from settings."""
    settings = settings or get_settings()
    if client is None:
        client = ShipStationClient(
            require_api_key(settings),
            base_url=settings.base_url,
            timeout=settings.request_timeout,
        )

    app = FastAPI(
        title="ShipStation API Server",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.dispatcher = Dispatcher(client)
    app.state.api_routers = API_ROUTERS

    @app.exception_handler(GatewayError)
    async def gateway_exception_handler(request: Request, exc: GatewayError):
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        if isinstance(exc, UpstreamError):
            status_code = exc.status_code
        else:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return JSONResponse(
            status_code=status_code,
            content=error_payload(exc.message, request.url.path),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=error_payload("Endpoint not found", request.url.path),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(str(exc.detail), request.url.path),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Request validation error on %s: %s", request.url.path, exc.errors())
        body = error_payload("Invalid request", request.url.path)
        body["detail"] = jsonable_encoder(exc.errors())
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Global Unhandled Exception on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload("Internal Server Error", request.url.path),
        )

    allowed_origins = settings.allowed_origins
    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials="*" not in allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(LoggingMiddleware)

    app.include_router(health_router)
    for router in API_ROUTERS:
        app.include_router(router)

    return app


def serve() -> None:
    """Console entry point: run the REST server with uvicorn."""
    settings = get_settings()
    setup_central_logging(settings.log_level, settings.log_dir)
    try:
        app = create_app(settings)
    except ConfigurationError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.exit(1)

    logger.info("ShipStation API Server running on %s:%d", settings.host, settings.port)
    logger.info("Visit http://localhost:%d for API documentation", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    serve()
