"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from automate_dns import SERVICE_NAME, __version__
from automate_dns.api.routers import resolvers
from automate_dns.core.config import get_settings
from automate_dns.core.database import close_engine, create_schema, get_engine
from automate_dns.core.errors import ResolverApiError
from automate_dns.core.logging import configure_logging, get_logger
from automate_dns.schemas.resolver import ServiceInfo

logger = get_logger(__name__)

ENDPOINTS = [
    "GET    /resolvers",
    "POST   /resolvers",
    "GET    /resolvers/:id",
    "PUT    /resolvers/:id",
    "PATCH  /resolvers/:id",
    "DELETE /resolvers/:id",
]


class JsonResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    configure_logging()
    settings = get_settings()
    logger.info(
        "Starting automate-dns",
        debug=settings.app_debug,
        dns_sync_enabled=settings.dns_sync_enabled,
    )

    get_engine()
    if settings.auto_create_schema:
        await create_schema()

    yield

    await close_engine()
    logger.info("automate-dns stopped")


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ResolverApiError)
    async def resolver_error(request: Request, exc: ResolverApiError) -> JsonResponse:
        return JsonResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JsonResponse:
        # Unknown paths and unsupported methods on known paths are both a miss
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JsonResponse({"error": "Not found"}, status_code=status.HTTP_404_NOT_FOUND)
        return JsonResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError) -> JsonResponse:
        errors = [str(err.get("msg", err)) for err in exc.errors()]
        return JsonResponse(
            {"error": "Malformed request", "errors": errors},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JsonResponse:
        logger.error(
            "Request handling error",
            method=request.method,
            path=request.url.path,
            error=str(exc),
            exc_info=exc,
        )
        return JsonResponse(
            {"error": "Internal Server Error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def create_app() -> FastAPI:
    app = FastAPI(
        title="automate-dns",
        description="Resolver registry with Cloudflare A-record sync",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        redirect_slashes=False,
        default_response_class=JsonResponse,
    )

    _register_error_handlers(app)
    app.include_router(resolvers.router)

    @app.get("/", response_model=ServiceInfo, tags=["meta"])
    async def service_info() -> ServiceInfo:
        return ServiceInfo(service=SERVICE_NAME, endpoints=ENDPOINTS)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, bool]:
        return {"ok": True}

    return app


app = create_app()
