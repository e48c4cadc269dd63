"""Admin routes: reviewer pool and indexing database configuration."""

from typing import Optional

from fastapi import APIRouter, Query

from journalbot.exceptions import NotFoundError
from journalbot.models.journal import DatabaseConfig
from journalbot.models.reviewer import Reviewer
from journalbot.web.schemas import (
    DatabaseConfigCreate,
    DatabaseConfigUpdate,
    ReviewerCreate,
    ReviewerUpdate,
)
from journalbot.web.state import state

router = APIRouter(prefix="/api/admin")


# ============================================================================
# Reviewers
# ============================================================================


@router.get("/reviewers")
async def list_reviewers(tenant_id: Optional[str] = Query(None, alias="tenantId")):
    return [r.to_dict() for r in state.repo.list_reviewers(tenant_id=tenant_id)]


@router.post("/reviewers", status_code=201)
async def create_reviewer(body: ReviewerCreate):
    reviewer = state.service.create_reviewer(
        Reviewer(
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            institution=body.institution,
            expertise=body.expertise,
            rating=body.rating,
            tenant_id=body.tenant_id,
        ),
        user_id=body.user_id,
    )
    return reviewer.to_dict()


@router.put("/reviewers/{reviewer_id}")
async def update_reviewer(reviewer_id: str, body: ReviewerUpdate):
    if state.repo.get_reviewer(reviewer_id) is None:
        raise NotFoundError("Reviewer not found", resource="reviewer")
    state.repo.update_reviewer(reviewer_id, **body.model_dump(exclude_unset=True))
    return state.repo.get_reviewer(reviewer_id).to_dict()


@router.delete("/reviewers/{reviewer_id}")
async def delete_reviewer(reviewer_id: str):
    if not state.repo.delete_reviewer(reviewer_id):
        raise NotFoundError("Reviewer not found", resource="reviewer")
    return {"success": True}


# ============================================================================
# Database configs
# ============================================================================


@router.get("/database-configs")
async def list_database_configs(tenant_id: Optional[str] = Query(None, alias="tenantId")):
    return [c.to_dict() for c in state.repo.list_database_configs(tenant_id=tenant_id)]


@router.post("/database-configs", status_code=201)
async def create_database_config(body: DatabaseConfigCreate):
    config = state.repo.create_database_config(
        DatabaseConfig(
            name=body.name,
            enabled=body.enabled,
            check_frequency=body.check_frequency,
            tenant_id=body.tenant_id,
        )
    )
    return config.to_dict()


@router.put("/database-configs/{config_id}")
async def update_database_config(config_id: str, body: DatabaseConfigUpdate):
    if state.repo.get_database_config(config_id) is None:
        raise NotFoundError("Database config not found", resource="database_config")
    state.repo.update_database_config(config_id, **body.model_dump(exclude_unset=True))
    return state.repo.get_database_config(config_id).to_dict()
