"""Indexing service: resolves rows from the repository and runs the scorers.

This is the layer between the HTTP/CLI surfaces and the pure functions
in :mod:`recommendation_service` and :mod:`analytics_service`.  It owns
lookups (raising :class:`NotFoundError`), audit logging and notifications;
the scorers themselves never touch the database.
"""

import logging
import random
from collections import defaultdict
from datetime import datetime
from typing import Any, Optional

from journalbot.database.repository import IndexingRepository
from journalbot.exceptions import InvalidInputError, NotFoundError
from journalbot.models.journal import DatabaseApplication, Journal
from journalbot.models.paper import Paper
from journalbot.models.reviewer import Reviewer
from journalbot.services import notification_service as events
from journalbot.services.analytics_service import (
    AdvancedAnalytics,
    JournalStats,
    compute_advanced_analytics,
    compute_stats,
)
from journalbot.services.notification_service import LoggingNotifier, Notifier
from journalbot.services.recommendation_service import (
    DEFAULT_LIMIT,
    RecommendationEntry,
    recommend,
)
from journalbot.services.scholar_service import ScholarVerifier
from journalbot.services.wordpress_service import WordPressSync

logger = logging.getLogger(__name__)


class IndexingService:
    """Entry points used by routes, the CLI and scheduled jobs."""

    def __init__(
        self,
        repo: IndexingRepository,
        verifier: Optional[ScholarVerifier] = None,
        wordpress: Optional[WordPressSync] = None,
        notifier: Optional[Notifier] = None,
        recommendation_limit: int = DEFAULT_LIMIT,
    ):
        self.repo = repo
        self.verifier = verifier or ScholarVerifier()
        self.wordpress = wordpress or WordPressSync()
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.recommendation_limit = recommendation_limit

    # ── Lookups ───────────────────────────────────────────────────────

    def require_paper(self, paper_id: str) -> Paper:
        paper = self.repo.get_paper(paper_id)
        if paper is None:
            raise NotFoundError("Paper not found", resource="paper")
        return paper

    def require_journal(self, journal_id: str) -> Journal:
        journal = self.repo.get_journal(journal_id)
        if journal is None:
            raise NotFoundError("Journal not found", resource="journal")
        return journal

    # ── Scoring ───────────────────────────────────────────────────────

    def recommend_reviewers(self, paper_id: str) -> list[RecommendationEntry]:
        """Top reviewers from the paper's tenant pool."""
        paper = self.require_paper(paper_id)
        pool = self.repo.list_reviewers(tenant_id=paper.tenant_id)
        return recommend(paper, pool, limit=self.recommendation_limit)

    def get_journal_stats(self, journal_id: str) -> JournalStats:
        journal = self.require_journal(journal_id)
        papers = self.repo.list_papers(journal_id=journal.id)
        applications = self.repo.list_applications(journal_id=journal.id)
        return compute_stats(papers, applications)

    def get_advanced_analytics(
        self,
        tenant_id: str,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ) -> AdvancedAnalytics:
        """Tenant-wide analytics. Citation figures are simulated."""
        papers = self.repo.list_papers(tenant_id=tenant_id)
        journals = self.repo.list_journals(tenant_id=tenant_id)
        configs = self.repo.list_database_configs(tenant_id=tenant_id)

        applications_by_db: dict[str, list[DatabaseApplication]] = defaultdict(list)
        for app in self.repo.list_applications(tenant_id=tenant_id):
            applications_by_db[app.database_config_id].append(app)

        return compute_advanced_analytics(
            papers, journals, configs, applications_by_db, now=now, rng=rng
        )

    # ── Writes with audit trail ───────────────────────────────────────

    def create_journal(self, journal: Journal, user_id: Optional[str] = None) -> Journal:
        journal = self.repo.create_journal(journal)
        self.repo.log_action(
            "CREATE_JOURNAL", journal.tenant_id, f"Created journal: {journal.name}", user_id
        )
        return journal

    def create_paper(self, paper: Paper) -> Paper:
        """Insert a paper into an existing journal of the same tenant."""
        journal = self.require_journal(paper.journal_id)
        if paper.tenant_id != journal.tenant_id:
            raise InvalidInputError("Paper tenant does not match journal tenant")
        return self.repo.create_paper(paper)

    def create_reviewer(self, reviewer: Reviewer, user_id: Optional[str] = None) -> Reviewer:
        reviewer = self.repo.create_reviewer(reviewer)
        self.repo.log_action(
            "CREATE_REVIEWER", reviewer.tenant_id, f"Created reviewer: {reviewer.email}", user_id
        )
        return reviewer

    def apply_to_database(
        self,
        journal_id: str,
        database_config_id: str,
        status: str = "PENDING",
        notes: Optional[str] = None,
        submitted_at: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> DatabaseApplication:
        """Create or update the journal's application to one database."""
        journal = self.require_journal(journal_id)
        config = self.repo.get_database_config(database_config_id)
        if config is None or config.tenant_id != journal.tenant_id:
            raise NotFoundError("Database config not found", resource="database_config")

        application = self.repo.upsert_application(
            DatabaseApplication(
                journal_id=journal_id,
                database_config_id=database_config_id,
                tenant_id=journal.tenant_id,
                status=status,  # type: ignore[arg-type]
                notes=notes,
                submitted_at=submitted_at,
            )
        )
        self.repo.log_action(
            "DB_APPLY",
            journal.tenant_id,
            f"Applied for {config.name} for journal {journal.name}: {status}",
            user_id,
        )
        self.notifier.notify(
            journal.tenant_id,
            events.database_application_updated(journal.name, config.name, status),
        )
        return application

    # ── External checks ───────────────────────────────────────────────

    def verify_paper(self, paper_id: str) -> dict[str, Any]:
        """Check the paper on Google Scholar and store the outcome."""
        paper = self.require_paper(paper_id)
        result = self.verifier.verify(paper)
        updated = self.repo.update_paper_indexing(
            paper.id, result.indexing_status, result.scholar_url  # type: ignore[arg-type]
        )
        self.repo.log_action(
            "SCHOLAR_VERIFY",
            paper.tenant_id,
            f"Indexing check for DOI {paper.doi}: "
            f"{'SUCCESS' if result.is_indexed else 'NOT FOUND'}",
        )
        self.notifier.notify(paper.tenant_id, events.paper_verified(updated.id, updated.indexing_status))
        return {
            "success": True,
            "isIndexed": result.is_indexed,
            "scholarUrl": result.scholar_url,
            "simulated": result.simulated,
            "paper": updated.to_dict(),
        }

    async def sync_journal(self, journal_id: str) -> dict[str, Any]:
        """Import the journal's WordPress posts as papers (upsert by DOI)."""
        journal = self.repo.get_journal(journal_id)
        if journal is None or not journal.wordpress_url:
            raise NotFoundError("Journal not found or has no WordPress URL", resource="journal")

        logger.info("Starting sync for journal: %s at %s", journal.name, journal.wordpress_url)
        posts = await self.wordpress.fetch_posts(journal)

        synced = 0
        for paper in self.wordpress.to_papers(journal, posts):
            self.repo.upsert_paper_by_doi(paper)
            synced += 1

        self.repo.touch_journal(journal.id)  # type: ignore[arg-type]
        message = f"Successfully synced {synced} papers from {journal.wordpress_url}"
        self.repo.log_action("WP_SYNC", journal.tenant_id, message)
        self.notifier.notify(journal.tenant_id, events.papers_synced(journal.name, synced))
        return {"success": True, "papersSynced": synced, "message": message}
