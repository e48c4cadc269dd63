"""Journal routes: CRUD, stats, WordPress sync and database applications."""

from typing import Literal, Optional

from fastapi import APIRouter, Query

from journalbot.models.journal import Journal
from journalbot.web.schemas import DatabaseApplicationRequest, JournalCreate
from journalbot.web.state import state

router = APIRouter(prefix="/api/journals")


@router.get("")
async def list_journals(
    tenant_id: Optional[str] = Query(None, alias="tenantId"),
    status: Optional[Literal["ACTIVE", "INACTIVE"]] = Query(None),
    search: Optional[str] = Query(None),
):
    journals = state.repo.list_journals(tenant_id=tenant_id, status=status, search=search)
    return [j.to_dict() for j in journals]


@router.post("", status_code=201)
async def create_journal(body: JournalCreate):
    journal = state.service.create_journal(
        Journal(
            name=body.name,
            code=body.code,
            issn=body.issn,
            status=body.status,
            wordpress_url=body.wordpress_url,
            tenant_id=body.tenant_id,
        ),
        user_id=body.user_id,
    )
    return journal.to_dict()


@router.get("/{journal_id}")
async def get_journal(journal_id: str):
    """Journal with its papers."""
    journal = state.service.require_journal(journal_id)
    papers = state.repo.list_papers(journal_id=journal_id)
    return {**journal.to_dict(), "papers": [p.to_dict() for p in papers]}


@router.get("/{journal_id}/stats")
async def journal_stats(journal_id: str):
    """Indexing stats. ``impactFactorEstimate`` is a synthetic estimate."""
    return state.service.get_journal_stats(journal_id).to_dict()


@router.post("/{journal_id}/sync")
async def sync_journal(journal_id: str):
    return await state.service.sync_journal(journal_id)


@router.get("/{journal_id}/applications")
async def list_applications(journal_id: str):
    state.service.require_journal(journal_id)
    return [a.to_dict() for a in state.repo.list_applications(journal_id=journal_id)]


@router.post("/{journal_id}/apply")
async def apply_to_database(journal_id: str, body: DatabaseApplicationRequest):
    application = state.service.apply_to_database(
        journal_id,
        body.database_config_id,
        status=body.status,
        notes=body.notes,
        submitted_at=body.submitted_at,
        user_id=body.user_id,
    )
    return application.to_dict()
