"""Health check endpoint — database and notification worker status."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.config import settings
from app.infrastructure.api.dependencies import dispatcher

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Check database connectivity and the notification dispatcher.

    A stopped dispatcher degrades the service only when notifications are
    enabled; assignments still work, but nobody hears about them.
    """
    try:
        await session.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    worker_ok = dispatcher.is_running or not settings.notifications_enabled
    healthy = db_status == "connected" and worker_ok

    return {
        "status": "ok" if healthy else "degraded",
        "database": db_status,
        "notifications": {
            "enabled": settings.notifications_enabled,
            "worker_running": dispatcher.is_running,
            "queue_depth": dispatcher.pending,
        },
        "service": "taskflow-assignment",
    }
