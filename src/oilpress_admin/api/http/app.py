"""Admin API application: service wiring, request logging and route registration."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.oilpress_admin.api.http.app_data import ApplicationDependencies
from src.oilpress_admin.api.http.routers import (
    catalog,
    content,
    dashboard,
    exports,
    highlights,
    inbox,
    media,
    pricing,
    reviews,
)
from src.oilpress_admin.api.http.security import require_admin
from src.oilpress_admin.api.utils.app_startup import configure_logging
from src.oilpress_admin.core.services import DbSessionService, MediaUploadService
from src.oilpress_admin.runtime.context import get_config

main_config = get_config()
is_production = main_config.app.environment == "production"

configure_logging()


async def startup() -> None:
    logger.info("Starting oilpress-admin ({})", get_config().app.environment)
    database_service = DbSessionService()
    database_service.create_all()
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        media_service=MediaUploadService(),
    )


async def shutdown() -> None:
    app_deps: ApplicationDependencies | None = getattr(app.state, "app_dependencies", None)
    if app_deps is not None:
        app_deps.database_service.dispose()
    logger.info("Shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="Oilpress Admin",
    lifespan=lifespan,
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

# --- CORS configuration ---
if is_production and "*" in main_config.app.cors.origins:
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=main_config.app.cors.origins,
    allow_credentials=main_config.app.cors.allow_credentials,
    allow_methods=main_config.app.cors.allow_methods,
    allow_headers=main_config.app.cors.allow_headers,
)


# --- Request logging middleware ---
def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _error_response(status_code: int, detail, request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "request_id": request_id},
        headers={"X-Request-ID": request_id},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag every log line of a request with its id and log how it ended."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    started = time.perf_counter()

    def elapsed_ms() -> float:
        return round((time.perf_counter() - started) * 1000, 1)

    with logger.contextualize(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client_ip=_client_ip(request),
    ):
        logger.info("request.start")
        try:
            response = await call_next(request)
        except HTTPException as exc:
            logger.bind(status_code=exc.status_code, duration_ms=elapsed_ms()).warning(
                "request.error: {}", exc.detail
            )
            return _error_response(exc.status_code, exc.detail, request_id)
        except RequestValidationError as exc:
            logger.bind(status_code=422, duration_ms=elapsed_ms()).warning(
                "request.validation_error"
            )
            return _error_response(422, jsonable_encoder(exc.errors()), request_id)
        except Exception as exc:
            logger.bind(
                status_code=500, duration_ms=elapsed_ms(), error_type=type(exc).__name__
            ).exception("request.error")
            return _error_response(500, "Internal Server Error", request_id)

        logger.bind(status_code=response.status_code, duration_ms=elapsed_ms()).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


# --- Health endpoints ---
@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/ready")
def ready(request: Request) -> JSONResponse:
    app_deps: ApplicationDependencies | None = getattr(
        request.app.state, "app_dependencies", None
    )
    if app_deps is None or not app_deps.database_service.health_check():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return JSONResponse(content={"status": "ready"})


# --- Router registration ---
_prefix = main_config.app.api_prefix
_admin = [Depends(require_admin)]

_routers = [
    (catalog.products_router, "/products", "products"),
    (catalog.combo_products_router, "/combo-products", "combo-products"),
    (catalog.gift_products_router, "/gift-products", "gift-products"),
    (content.blogs_router, "/blogs", "blogs"),
    (content.podcasts_router, "/podcasts", "podcasts"),
    (content.testimonials_router, "/testimonials", "testimonials"),
    (content.faqs_router, "/faqs", "faqs"),
    (content.banners_router, "/banners", "banners"),
    (content.slider_router, "/slider", "slider"),
    (inbox.bulk_orders_router, "/bulk-orders", "bulk-orders"),
    (inbox.contact_messages_router, "/contact-messages", "contact-messages"),
    (inbox.visitors_router, "/visitors", "visitors"),
    (reviews.router, "/reviews", "reviews"),
    (highlights.router, "/highlights", "highlights"),
    (media.router, "/media", "media"),
    (pricing.router, "/pricing", "pricing"),
    (dashboard.router, "/dashboard", "dashboard"),
    (exports.router, "/exports", "exports"),
]

for router, path, tag in _routers:
    app.include_router(router, prefix=f"{_prefix}{path}", tags=[tag], dependencies=_admin)
