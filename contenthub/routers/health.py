"""
Health Check Endpoints

Provides endpoints for monitoring database connectivity, storage
configuration and process liveness.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
import logging
from datetime import datetime, timezone
from typing import Dict, Any

from contenthub.dependencies import get_db
from contenthub.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# HEALTH CHECK ENDPOINTS
# =============================================================================

@router.get("")
@router.get("/")
async def health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Comprehensive health check endpoint.

    Checks:
    - Database connectivity
    - Object storage configuration

    Returns:
        Health status with component details
    """
    health_status = {
        "status": "healthy",
        "timestamp": _now(),
        "environment": settings.ENVIRONMENT,
        "version": settings.APP_VERSION,
        "checks": {}
    }

    # Check database connectivity
    try:
        db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}"
        }

    # S3 bucket and credentials
    credentials_configured = bool(settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY)
    health_status["checks"]["storage"] = {
        "status": "healthy" if credentials_configured else "warning",
        "bucket": settings.S3_BUCKET_NAME,
        "region": settings.AWS_REGION,
        "credentials_configured": credentials_configured
    }

    return health_status


@router.get("/ready")
async def readiness_check(db: Session = Depends(get_db)) -> Dict[str, str]:
    """
    Readiness probe: ready once the database answers.
    """
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "ready",
            "timestamp": _now()
        }
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        return {
            "status": "not_ready",
            "error": str(e),
            "timestamp": _now()
        }


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """
    Liveness probe. Doesn't verify external dependencies.
    """
    return {
        "status": "alive",
        "timestamp": _now()
    }


@router.get("/version")
async def version_info() -> Dict[str, str]:
    """Application version details"""
    return {
        "version": settings.APP_VERSION,
        "name": settings.APP_NAME,
        "environment": settings.ENVIRONMENT
    }
