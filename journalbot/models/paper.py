"""Paper data model."""

from dataclasses import dataclass
from typing import Any, Literal, Optional

from journalbot.utils.text import split_authors

IndexingStatus = Literal["PENDING", "INDEXED", "NOT_INDEXED", "NOT_FOUND"]

INDEXING_STATUSES: tuple[str, ...] = ("PENDING", "INDEXED", "NOT_INDEXED", "NOT_FOUND")


@dataclass
class Paper:
    """A paper published by a journal, tracked for indexing."""

    title: str
    doi: str
    authors: str
    journal_id: str
    tenant_id: str
    pub_date: Optional[str] = None
    indexing_status: IndexingStatus = "PENDING"
    scholar_url: Optional[str] = None

    # Database fields (set after persistence)
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def author_list(self) -> list[str]:
        """Authors split on commas, order preserved."""
        return split_authors(self.authors)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the HTTP API (authors as a list, scholar status nested)."""
        return {
            "id": self.id,
            "title": self.title,
            "doi": self.doi,
            "authors": self.author_list,
            "pubDate": self.pub_date,
            "indexingStatus": self.indexing_status,
            "scholarUrl": self.scholar_url,
            "journalId": self.journal_id,
            "tenantId": self.tenant_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "indexing": {
                "scholar": {"status": self.indexing_status, "url": self.scholar_url},
            },
        }
