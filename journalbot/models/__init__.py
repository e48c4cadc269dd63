"""Domain models."""

from journalbot.models.journal import (
    APPLICATION_STATUSES,
    DatabaseApplication,
    DatabaseConfig,
    Journal,
)
from journalbot.models.paper import INDEXING_STATUSES, Paper
from journalbot.models.reviewer import Reviewer

__all__ = [
    "APPLICATION_STATUSES",
    "INDEXING_STATUSES",
    "DatabaseApplication",
    "DatabaseConfig",
    "Journal",
    "Paper",
    "Reviewer",
]
