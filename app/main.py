"""Vaan Sanskrit API: FastAPI application, middleware stack and error envelopes."""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os
from dotenv import load_dotenv

# Environment must be loaded before settings are read
load_dotenv()

from app.core.logging_config import setup_logging
from app.core.settings import settings
from app.services.llm import llm_available
from app.middleware.cors import PreflightMiddleware
from app.middleware.logging import LoggingMiddleware
from app.routes import (
    health, word_of_day, baby_names, learning, user, translations, checkout,
    admin, admin_videos, admin_blog, admin_news,
)
from app.exceptions import (
    UnauthorizedException, ForbiddenException,
    NotFoundException, ValidationException, UpstreamServiceError,
)

logger = setup_logging()

_docs_enabled = settings.is_development or os.getenv("SHOW_DOCS", "").lower() in ("1", "true", "yes")

# Domain exceptions and the level they are logged at
_LOGGED_EXCEPTIONS = {
    UnauthorizedException: logging.WARNING,
    ForbiddenException: logging.WARNING,
    NotFoundException: logging.INFO,
    ValidationException: logging.WARNING,
    UpstreamServiceError: logging.ERROR,
}


def _configured(flag) -> str:
    return "✅ configured" if flag else "❌ not configured"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Vaan Sanskrit API starting up")
    logger.info(f"📁 Environment: {settings.environment} | CORS origins: {settings.cors_origins}")
    logger.info(f"🤖 LLM enrichment: {_configured(llm_available())}")
    logger.info(f"💳 Stripe checkout: {_configured(settings.stripe_secret_key or settings.stripe_test_secret_key)}")
    logger.info(f"🈯 Translation API: {settings.translate_api_url}")
    yield
    logger.info("🛑 Vaan Sanskrit API shutting down")


app = FastAPI(
    title="Vaan Sanskrit API",
    description="Word of the day, baby names, learning progress and admin content for the Sanskrit learning site",
    version=health.API_VERSION,
    docs_url="/docs" if _docs_enabled else None,
    redoc_url="/redoc" if _docs_enabled else None,
    lifespan=lifespan,
)

# Last added runs first: preflight, then CORS, then request logging
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-ID"],
)
app.add_middleware(PreflightMiddleware)

app.include_router(health.router, prefix="/health", tags=["Health"])
for module in (
    word_of_day, baby_names, learning, user, translations, checkout,
    admin, admin_videos, admin_blog, admin_news,
):
    app.include_router(module.router)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", "unknown")


def _error_response(request: Request, status_code: int, detail) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "correlation_id": _correlation_id(request)},
    )


async def domain_exception_handler(request: Request, exc: StarletteHTTPException):
    level = _LOGGED_EXCEPTIONS.get(type(exc), logging.WARNING)
    reason = getattr(exc, "reason", None)
    logger.log(
        level,
        f"[{_correlation_id(request)}] {type(exc).__name__} on {request.url.path}: {exc.detail}"
        + (f" ({reason})" if reason else ""),
    )
    return _error_response(request, exc.status_code, exc.detail)


for exc_class in _LOGGED_EXCEPTIONS:
    app.add_exception_handler(exc_class, domain_exception_handler)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    logger.warning(f"[{_correlation_id(request)}] Invalid request on {request.url.path}: {errors}")
    return _error_response(request, 400, errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(request, exc.status_code, exc.detail)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"[{_correlation_id(request)}] Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    content = {"detail": "Internal server error", "correlation_id": _correlation_id(request)}
    if settings.is_development:
        content.update(error=str(exc), type=type(exc).__name__)
    return JSONResponse(status_code=500, content=content)


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": "Vaan Sanskrit API",
        "version": health.API_VERSION,
        "environment": settings.environment,
        "docs_url": "/docs" if _docs_enabled else None,
        "health_check": "/health",
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        log_level="info" if settings.is_development else "warning",
    )
