"""Tenant analytics route."""

from fastapi import APIRouter

from journalbot.web.state import state

router = APIRouter(prefix="/api/analytics")


@router.get("/{tenant_id}")
async def advanced_analytics(tenant_id: str):
    """Tenant-wide analytics.

    ``citationMetrics`` and ``topPapers`` use simulated citation counts
    and change on every call.
    """
    return state.service.get_advanced_analytics(tenant_id).to_dict()
