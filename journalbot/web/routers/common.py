"""Common routes: health, API banner, audit log, notifications, databases."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from journalbot import __version__
from journalbot.web.state import state

router = APIRouter()


@router.get("/health")
async def health():
    """Report whether the database answers."""
    try:
        state.repo.ping()
    except Exception as e:
        return JSONResponse(
            {"status": "unhealthy", "database": "disconnected", "error": str(e)},
            status_code=503,
        )
    return {
        "status": "healthy",
        "database": "connected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/api")
async def banner():
    return {"message": "Journal Indexing API running", "version": __version__}


@router.get("/api/databases")
async def enabled_databases(tenant_id: Optional[str] = Query(None, alias="tenantId")):
    """Enabled indexing databases, by name."""
    configs = state.repo.list_database_configs(tenant_id=tenant_id, enabled_only=True)
    return [c.to_dict() for c in configs]


@router.get("/api/audit_logs")
async def audit_logs(
    tenant_id: Optional[str] = Query(None, alias="tenantId"),
    limit: int = Query(100, ge=1, le=1000),
):
    """Audit log entries, newest first."""
    return state.repo.list_audit_logs(tenant_id=tenant_id, limit=limit)


@router.get("/api/notifications/{tenant_id}")
async def notifications(tenant_id: str, drain: bool = Query(False)):
    """Recent notifications for a tenant (``drain=true`` clears them)."""
    events = state.notifier.drain(tenant_id) if drain else state.notifier.recent(tenant_id)
    return [e.to_dict() for e in events]
