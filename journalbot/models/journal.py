"""Journal and indexing-database data models."""

from dataclasses import dataclass
from typing import Any, Literal, Optional

JournalStatus = Literal["ACTIVE", "INACTIVE"]
ApplicationStatus = Literal["PENDING", "SUBMITTED", "UNDER_REVIEW", "ACCEPTED", "REJECTED"]

APPLICATION_STATUSES: tuple[str, ...] = (
    "PENDING",
    "SUBMITTED",
    "UNDER_REVIEW",
    "ACCEPTED",
    "REJECTED",
)


@dataclass
class Journal:
    """A journal managed by a tenant."""

    name: str
    code: str
    issn: str
    tenant_id: str
    status: JournalStatus = "ACTIVE"
    wordpress_url: Optional[str] = None

    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "issn": self.issn,
            "status": self.status,
            "wordpressUrl": self.wordpress_url,
            "tenantId": self.tenant_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class DatabaseConfig:
    """An external indexing database (Scopus, PubMed, DOAJ, ...)."""

    name: str
    tenant_id: str
    enabled: bool = True
    check_frequency: str = "WEEKLY"

    id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "enabled": self.enabled,
            "checkFrequency": self.check_frequency,
            "tenantId": self.tenant_id,
        }


@dataclass
class DatabaseApplication:
    """A journal's application to one indexing database.

    At most one application exists per (journal, database config) pair.
    ``database_name`` is resolved from the joined config when loaded.
    """

    journal_id: str
    database_config_id: str
    tenant_id: str
    status: ApplicationStatus = "PENDING"
    notes: Optional[str] = None
    submitted_at: Optional[str] = None
    database_name: str = ""

    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "journalId": self.journal_id,
            "databaseConfigId": self.database_config_id,
            "databaseName": self.database_name,
            "status": self.status,
            "notes": self.notes,
            "submittedAt": self.submitted_at,
            "tenantId": self.tenant_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
