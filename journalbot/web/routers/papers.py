"""Paper routes: listing, creation, reviewer recommendation, Scholar verification."""

from typing import Literal, Optional

from fastapi import APIRouter, Query

from journalbot.models.paper import Paper
from journalbot.utils.text import normalize_doi
from journalbot.web.schemas import PaperCreate
from journalbot.web.state import state

router = APIRouter(prefix="/api/papers")

IndexingStatusFilter = Literal["INDEXED", "NOT_INDEXED", "NOT_FOUND", "PENDING"]


@router.get("")
async def list_papers(
    tenant_id: Optional[str] = Query(None, alias="tenantId"),
    journal_id: Optional[str] = Query(None, alias="journalId"),
    indexing_status: Optional[IndexingStatusFilter] = Query(None, alias="indexingStatus"),
    search: Optional[str] = Query(None),
):
    papers = state.repo.list_papers(
        tenant_id=tenant_id,
        journal_id=journal_id,
        indexing_status=indexing_status,
        search=search,
    )
    return [p.to_dict() for p in papers]


@router.post("", status_code=201)
async def create_paper(body: PaperCreate):
    paper = state.service.create_paper(
        Paper(
            title=body.title,
            doi=normalize_doi(body.doi),
            authors=body.authors,
            journal_id=body.journal_id,
            tenant_id=body.tenant_id,
            pub_date=body.pub_date,
            indexing_status=body.indexing_status,
        )
    )
    return paper.to_dict()


@router.get("/{paper_id}")
async def get_paper(paper_id: str):
    return state.service.require_paper(paper_id).to_dict()


@router.get("/{paper_id}/recommend")
async def recommend_reviewers(paper_id: str):
    """Top reviewers for the paper by expertise overlap and rating."""
    return [entry.to_dict() for entry in state.service.recommend_reviewers(paper_id)]


@router.post("/{paper_id}/verify")
def verify_paper(paper_id: str):
    # sync handler: the Scholar request blocks, FastAPI runs it in a threadpool
    return state.service.verify_paper(paper_id)
