"""Request bodies validated at the HTTP boundary.

Field names are camelCase on the wire (``tenantId``) and snake_case in
Python; both spellings are accepted on input.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ISSN_PATTERN = r"^\d{4}-\d{3}[\dX]$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
URL_PATTERN = r"^https?://\S+$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}([T ][\d:.]+(Z|[+-]\d{2}:?\d{2})?)?$"

ApplicationStatus = Literal["PENDING", "SUBMITTED", "UNDER_REVIEW", "ACCEPTED", "REJECTED"]


class _Body(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JournalCreate(_Body):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    issn: str = Field(pattern=ISSN_PATTERN)
    status: Literal["ACTIVE", "INACTIVE"] = "ACTIVE"
    wordpress_url: Optional[str] = Field(default=None, pattern=URL_PATTERN)
    tenant_id: str = Field(min_length=1)
    user_id: Optional[str] = None


class PaperCreate(_Body):
    title: str = Field(min_length=1)
    doi: str = Field(min_length=1)
    authors: str = Field(min_length=1)
    pub_date: str = Field(pattern=DATE_PATTERN)
    journal_id: str = Field(min_length=1)
    tenant_id: str = Field(min_length=1)
    indexing_status: Literal["PENDING", "INDEXED", "NOT_INDEXED", "NOT_FOUND"] = "PENDING"


class ReviewerCreate(_Body):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    institution: Optional[str] = None
    expertise: str = Field(min_length=1)
    rating: float = 0.0
    tenant_id: str = Field(min_length=1)
    user_id: Optional[str] = None


class ReviewerUpdate(_Body):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    institution: Optional[str] = None
    expertise: Optional[str] = Field(default=None, min_length=1)
    rating: Optional[float] = None


class DatabaseConfigCreate(_Body):
    name: str = Field(min_length=1)
    enabled: bool = True
    check_frequency: str = "WEEKLY"
    tenant_id: str = Field(min_length=1)


class DatabaseConfigUpdate(_Body):
    name: Optional[str] = Field(default=None, min_length=1)
    enabled: Optional[bool] = None
    check_frequency: Optional[str] = None


class DatabaseApplicationRequest(_Body):
    database_config_id: str = Field(min_length=1)
    status: ApplicationStatus = "PENDING"
    notes: Optional[str] = None
    submitted_at: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    user_id: Optional[str] = None
