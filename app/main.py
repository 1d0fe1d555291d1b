"""FastAPI application entry point."""

from __future__ import annotations

from fastapi import Depends, FastAPI, Request
from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from fastapi.responses import JSONResponse, Response

from app.api import itineraries
from app.api.dependencies import require_service_secret
from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.logging_config import configure_logging

configure_logging()
logger = get_logger(__name__)
settings = get_settings()

DOCS_MODES = ("disabled", "secret", "public")
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def _resolve_docs_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    if normalized in DOCS_MODES:
        return normalized
    logger.warning("Unknown DOCS_MODE=%s; docs stay disabled", mode)
    return "disabled"


docs_mode = _resolve_docs_mode(settings.DOCS_MODE)
public_docs = docs_mode == "public"

app = FastAPI(
    title="Outing Planner",
    description="Builds timed, costed outing plans with backups and a swap menu from candidate venues.",
    docs_url="/docs" if public_docs else None,
    redoc_url="/redoc" if public_docs else None,
    openapi_url="/openapi.json" if public_docs else None,
)
app.include_router(itineraries.router)
logger.info("Outing Planner started: env=%s docs_mode=%s", settings.APP_ENV, docs_mode)


@app.middleware("http")
async def add_security_headers(request: Request, call_next) -> Response:
    response = await call_next(request)
    if settings.SECURITY_HEADERS_ENABLED:
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer 500 without leaking internals unless EXPOSE_INTERNAL_ERRORS is set."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    detail = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else "Internal server error."
    return JSONResponse(status_code=500, content={"detail": detail})


if docs_mode == "secret":
    guarded = [Depends(require_service_secret)]

    @app.get("/openapi.json", include_in_schema=False, dependencies=guarded)
    def openapi_json() -> JSONResponse:
        return JSONResponse(app.openapi())

    @app.get("/docs", include_in_schema=False, dependencies=guarded)
    def swagger_ui() -> Response:
        return get_swagger_ui_html(openapi_url="/openapi.json", title=f"{app.title} - Swagger UI")

    @app.get("/redoc", include_in_schema=False, dependencies=guarded)
    def redoc_ui() -> Response:
        return get_redoc_html(openapi_url="/openapi.json", title=f"{app.title} - ReDoc")


@app.get("/")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "message": "Outing Planner Server is running"}
