"""Reviewer data model."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Reviewer:
    """A member of a tenant's peer-reviewer pool."""

    first_name: str
    last_name: str
    email: str
    expertise: str
    tenant_id: str
    institution: Optional[str] = None
    rating: float = 0.0

    id: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "institution": self.institution,
            "expertise": self.expertise,
            "rating": self.rating,
            "tenantId": self.tenant_id,
            "createdAt": self.created_at,
        }
