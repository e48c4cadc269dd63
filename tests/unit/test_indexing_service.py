"""Unit tests for IndexingService."""

import asyncio
import random
from datetime import datetime, timezone

import httpx
import pytest

from journalbot.exceptions import InvalidInputError, NotFoundError
from journalbot.models.journal import DatabaseConfig, Journal
from journalbot.services.indexing_service import IndexingService
from journalbot.services.wordpress_service import WordPressSync
from tests.conftest import StubVerifier
from tests.factories import TENANT, make_paper, make_reviewer


class TestLookups:
    def test_missing_paper(self, service) -> None:
        with pytest.raises(NotFoundError, match="Paper not found"):
            service.require_paper("missing")

    def test_missing_journal(self, service) -> None:
        with pytest.raises(NotFoundError, match="Journal not found"):
            service.get_journal_stats("missing")


class TestRecommendReviewers:
    def test_uses_the_paper_tenant_pool(self, service, repo, journal, sample_paper) -> None:
        repo.create_paper(sample_paper)
        repo.create_reviewer(make_reviewer("Turing", "Machine Learning", 4.5))
        repo.create_reviewer(make_reviewer("Outsider", "Machine Learning", 5, tenant_id="tenant_2"))

        entries = service.recommend_reviewers(sample_paper.id)

        assert [e.last_name for e in entries] == ["Turing"]
        assert entries[0].score == 19

    def test_limit_comes_from_service(self, repo, journal, sample_paper) -> None:
        repo.create_paper(sample_paper)
        for i in range(4):
            repo.create_reviewer(make_reviewer(f"R{i}", "indexing", 1))
        service = IndexingService(repo, verifier=StubVerifier(), recommendation_limit=2)

        assert len(service.recommend_reviewers(sample_paper.id)) == 2


class TestStatsAndAnalytics:
    def test_journal_stats(self, service, repo, journal) -> None:
        for i in range(10):
            repo.create_paper(make_paper(i, "INDEXED" if i < 6 else "NOT_INDEXED"))
        repo.create_database_config(DatabaseConfig(id="db-scopus", name="Scopus", tenant_id=TENANT))
        service.apply_to_database(journal.id, "db-scopus", status="ACCEPTED")

        stats = service.get_journal_stats(journal.id)

        assert stats.indexing_rate == 60
        assert stats.impact_factor_estimate == 2.4
        assert stats.indexing_by_service.scopus is True
        assert stats.indexing_by_service.pubmed is False

    def test_advanced_analytics_is_tenant_scoped(self, service, repo, journal) -> None:
        other = repo.create_journal(
            Journal(name="Elsewhere", code="ELS", issn="0000-0001", tenant_id="tenant_2")
        )
        repo.create_paper(make_paper(1, "INDEXED"))
        repo.create_paper(make_paper(2, "PENDING", journal_id=other.id, tenant_id="tenant_2"))
        repo.create_database_config(DatabaseConfig(id="db-doaj", name="DOAJ", tenant_id=TENANT))
        service.apply_to_database(journal.id, "db-doaj", status="ACCEPTED")

        analytics = service.get_advanced_analytics(
            TENANT,
            now=datetime(2026, 10, 18, tzinfo=timezone.utc),
            rng=random.Random(3),
        )

        assert analytics.total_papers == 1
        assert analytics.indexed_papers == 1
        assert analytics.indexing_trend == 100
        assert analytics.indexing_trends[-1].month == "Oct 2026"
        assert analytics.indexing_trends[-1].indexed == 1
        (coverage,) = analytics.database_coverage
        assert (coverage.name, coverage.journals_indexed, coverage.coverage) == ("DOAJ", 1, 100)


class TestWrites:
    def test_create_journal_and_reviewer_are_audited(self, service, repo) -> None:
        service.create_journal(
            Journal(name="Audited", code="AUD", issn="2222-3333", tenant_id=TENANT),
            user_id="admin-1",
        )
        service.create_reviewer(make_reviewer("Turing", "ai"))

        actions = [(e["action"], e["userId"]) for e in repo.list_audit_logs(tenant_id=TENANT)]
        assert actions == [("CREATE_REVIEWER", None), ("CREATE_JOURNAL", "admin-1")]

    def test_apply_to_database_notifies(self, service, repo, journal, notifier) -> None:
        repo.create_database_config(DatabaseConfig(id="db-scopus", name="Scopus", tenant_id=TENANT))

        service.apply_to_database(journal.id, "db-scopus", status="SUBMITTED")
        application = service.apply_to_database(journal.id, "db-scopus", status="UNDER_REVIEW")

        assert application.status == "UNDER_REVIEW"
        events = notifier.recent(TENANT)
        assert [e.title for e in events] == ["Database Application Updated"] * 2
        assert events[-1].data["status"] == "UNDER_REVIEW"
        assert repo.list_audit_logs(tenant_id=TENANT)[0]["action"] == "DB_APPLY"

    def test_apply_to_unknown_database(self, service, journal) -> None:
        with pytest.raises(NotFoundError, match="Database config not found"):
            service.apply_to_database(journal.id, "missing")

    def test_apply_with_other_tenant_database(self, service, repo, journal, notifier) -> None:
        repo.create_database_config(
            DatabaseConfig(id="db-foreign", name="Scopus", tenant_id="tenant_2")
        )

        with pytest.raises(NotFoundError, match="Database config not found"):
            service.apply_to_database(journal.id, "db-foreign", status="ACCEPTED")

        assert repo.list_applications(journal_id=journal.id) == []
        assert notifier.recent(TENANT) == []

    def test_create_paper(self, service, repo, journal) -> None:
        paper = service.create_paper(make_paper(1))

        assert repo.get_paper(paper.id).journal_id == journal.id

    def test_create_paper_for_other_tenant_journal(self, service, repo, journal) -> None:
        with pytest.raises(InvalidInputError, match="does not match"):
            service.create_paper(make_paper(1, tenant_id="tenant_2"))

        assert repo.list_papers() == []

    def test_create_paper_for_unknown_journal(self, service) -> None:
        with pytest.raises(NotFoundError, match="Journal not found"):
            service.create_paper(make_paper(1, journal_id="missing"))


class TestVerifyPaper:
    def test_indexed(self, service, repo, journal, sample_paper, notifier, stub_verifier) -> None:
        repo.create_paper(sample_paper)

        result = service.verify_paper(sample_paper.id)

        assert result["success"] is True
        assert result["isIndexed"] is True
        assert result["paper"]["indexingStatus"] == "INDEXED"
        assert result["paper"]["indexing"]["scholar"]["url"] == result["scholarUrl"]
        assert stub_verifier.checked == [sample_paper.id]
        assert repo.get_paper(sample_paper.id).indexing_status == "INDEXED"
        assert notifier.recent(TENANT)[0].type == "success"
        log = repo.list_audit_logs(tenant_id=TENANT)[0]
        assert log["action"] == "SCHOLAR_VERIFY"
        assert log["details"].endswith("SUCCESS")

    def test_not_found(self, repo, journal, sample_paper, notifier) -> None:
        repo.create_paper(sample_paper)
        service = IndexingService(repo, verifier=StubVerifier(is_indexed=False), notifier=notifier)

        result = service.verify_paper(sample_paper.id)

        assert result["isIndexed"] is False
        assert result["paper"]["indexingStatus"] == "NOT_FOUND"
        assert notifier.recent(TENANT)[0].type == "warning"

    def test_missing_paper(self, service) -> None:
        with pytest.raises(NotFoundError):
            service.verify_paper("missing")


class TestSyncJournal:
    def _service(self, repo, notifier, posts) -> IndexingService:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=posts))
        return IndexingService(
            repo,
            verifier=StubVerifier(),
            wordpress=WordPressSync(transport=transport),
            notifier=notifier,
        )

    def test_imports_and_upserts_by_doi(self, repo, journal, notifier) -> None:
        posts = [
            {"id": 1, "title": {"rendered": "First"}, "date": "2026-10-01T00:00:00"},
            {"id": 2, "title": {"rendered": "Second"}, "date": "2026-10-02T00:00:00"},
        ]
        service = self._service(repo, notifier, posts)

        result = asyncio.run(service.sync_journal(journal.id))

        assert result == {
            "success": True,
            "papersSynced": 2,
            "message": "Successfully synced 2 papers from https://journal-example.com",
        }
        assert sorted(p.doi for p in repo.list_papers(journal_id=journal.id)) == [
            "10.5555/ijsr.1",
            "10.5555/ijsr.2",
        ]

        posts[0]["title"]["rendered"] = "First (revised)"
        asyncio.run(service.sync_journal(journal.id))

        papers = repo.list_papers(journal_id=journal.id)
        assert len(papers) == 2
        assert "First (revised)" in {p.title for p in papers}
        assert notifier.recent(TENANT)[-1].data["papersSynced"] == 2
        assert repo.list_audit_logs(tenant_id=TENANT)[0]["action"] == "WP_SYNC"

    def test_journal_without_wordpress_url(self, service, repo) -> None:
        journal = repo.create_journal(
            Journal(name="Offline", code="OFF", issn="3333-4444", tenant_id=TENANT)
        )

        with pytest.raises(NotFoundError, match="no WordPress URL"):
            asyncio.run(service.sync_journal(journal.id))

    def test_unknown_journal(self, service) -> None:
        with pytest.raises(NotFoundError):
            asyncio.run(service.sync_journal("missing"))
