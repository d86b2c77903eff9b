from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from sqlmodel import Session, text

from eventdesk.config import config
from eventdesk.models.database import engine, redis_client

health = APIRouter(tags=["Health"])


def _base_status() -> dict:
    return {
        "status": "healthy",
        "service": "eventdesk",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config["environment"],
    }


@health.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return _base_status()


@health.get("/health/detailed")
async def detailed_health_check():
    """Detailed health check with database and draft store checks"""
    health_status = {**_base_status(), "checks": {}}

    # Database connectivity check (only when projects live in the database)
    if config["storage_backend"] == "sql":
        try:
            with Session(engine) as session:
                result = session.exec(text("SELECT 1")).first()
                health_status["checks"]["database"] = (
                    "healthy" if result else "unhealthy"
                )
        except Exception as e:
            health_status["checks"]["database"] = f"unhealthy: {str(e)}"
            health_status["status"] = "unhealthy"
    else:
        health_status["checks"]["database"] = "skipped: local store"

    # Drafts degrade gracefully, so Redis is reported but not fatal
    try:
        redis_client.ping()
        health_status["checks"]["redis"] = "healthy"
    except Exception as e:
        health_status["checks"]["redis"] = f"unhealthy: {str(e)}"

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
