"""
Liveness, readiness and a detailed status page for operators.

Nothing here requires auth; nothing here leaks secrets, only whether a
provider is configured.
"""
import time
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db import get_db, check_database_health
from app.models.lexeme import Lexeme
from app.services.llm import get_llm_service
from app.core.settings import settings

logger = logging.getLogger("app.health")
router = APIRouter()

API_VERSION = "1.0.0"


def _llm_status() -> dict:
    # same gate the baby-names listing uses before scheduling enrichment
    service = get_llm_service()
    primary = service.primary_provider
    status = {
        "status": "configured" if service.is_available() else "not_configured",
        "primary_provider": primary.PROVIDER_NAME,
        "primary_model": primary.model,
        "primary_available": primary.is_available(),
        "fallback_enabled": service.fallback_enabled,
    }
    if not service.is_available():
        status["note"] = "Lexeme enrichment disabled"
    return status


async def _database_status(db: Session) -> dict:
    try:
        status = await check_database_health()
        if status["status"] == "healthy":
            status["lexemes"] = db.query(Lexeme).count()
        return status
    except Exception as e:
        logger.error(f"Database status check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}


@router.get("")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.environment,
        "version": API_VERSION,
    }


@router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """Database (with lexeme count), LLM provider and Stripe key presence."""
    started = time.time()
    services = {
        "database": await _database_status(db),
        "llm": _llm_status(),
        "stripe": {
            "live": bool(settings.stripe_secret_key),
            "test": bool(settings.stripe_test_secret_key),
        },
    }
    return {
        "status": "healthy" if services["database"]["status"] == "healthy" else "degraded",
        "timestamp": time.time(),
        "environment": settings.environment,
        "services": services,
        "response_time_ms": round((time.time() - started) * 1000, 2),
    }


@router.get("/ready")
async def readiness_check():
    if (await check_database_health())["status"] != "healthy":
        return {"status": "not_ready", "reason": "database_unavailable"}
    return {"status": "ready"}


@router.get("/live")
async def liveness_check():
    return {"status": "alive", "timestamp": time.time()}
