"""JournalBot - journal indexing administration backend.

Tracks journals, their papers, reviewer pools and applications to
external indexing databases, and computes reviewer recommendations
and indexing analytics over them.
"""

__version__ = "1.0.0"

from journalbot.config import Settings
from journalbot.models import DatabaseApplication, DatabaseConfig, Journal, Paper, Reviewer

__all__ = [
    "DatabaseApplication",
    "DatabaseConfig",
    "Journal",
    "Paper",
    "Reviewer",
    "Settings",
    "__version__",
]
