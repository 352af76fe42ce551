# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB + live dashboard subscribers.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from app.database import get_db
from app.config import settings
from app.services.notifier import AlertNotifier, get_notifier
from app.utils.logger import get_logger
from datetime import datetime

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db), notifier: AlertNotifier = Depends(get_notifier)):
    """
    Returns:
    - Backend status
    - Database connectivity
    - Number of connected dashboards
    - Whether photo uploads are configured
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "database": "unknown",
        "subscribers": notifier.subscriber_count,
        "media_service": "configured" if settings.media_configured else "not configured",
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        logger.error(f"Health check: database unreachable: {e}")
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
