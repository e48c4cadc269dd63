"""Unit tests for the periodic verification and report jobs."""

from datetime import datetime, timedelta, timezone

import requests

from journalbot.models.journal import Journal
from journalbot.services import scheduler
from journalbot.services.scholar_service import VerificationResult
from tests.factories import TENANT, make_paper


class FlakyVerifier:
    """Fails for selected paper ids, reports everything else as indexed."""

    def __init__(self, failing: set):
        self.failing = failing

    def verify(self, paper):
        if paper.id in self.failing:
            raise requests.ConnectionError("Scholar unavailable")
        return VerificationResult(is_indexed=True, scholar_url="https://scholar.example")


class TestDailyVerification:
    """Test suite for run_daily_verification."""

    def test_checks_not_indexed_and_stale_papers(self, service, repo, journal) -> None:
        repo.create_paper(make_paper(1, "NOT_INDEXED"))
        repo.create_paper(make_paper(2, "PENDING"))
        repo.create_paper(make_paper(3, "INDEXED"))
        sleeps = []
        later = datetime.now(timezone.utc) + timedelta(days=8)

        run = scheduler.run_daily_verification(service, now=later, sleep=sleeps.append)

        assert run.to_dict() == {"verified": 2, "indexed": 2, "failed": []}
        assert sorted(service.verifier.checked) == ["paper-1", "paper-2"]
        # no delay after the last paper
        assert sleeps == [2.0]

    def test_recently_checked_pending_papers_wait(self, service, repo, journal) -> None:
        repo.create_paper(make_paper(1, "NOT_INDEXED"))
        repo.create_paper(make_paper(2, "PENDING"))

        run = scheduler.run_daily_verification(service, sleep=lambda s: None)

        assert service.verifier.checked == ["paper-1"]
        assert run.checked == 1

    def test_batch_size(self, service, repo, journal) -> None:
        for i in range(4):
            repo.create_paper(make_paper(i, "NOT_INDEXED"))

        run = scheduler.run_daily_verification(
            service, batch_size=3, delay=0, sleep=lambda s: None
        )

        assert run.checked == 3

    def test_failure_does_not_stop_the_batch(self, service, repo, journal) -> None:
        for i in range(3):
            repo.create_paper(make_paper(i, "NOT_INDEXED"))
        service.verifier = FlakyVerifier(failing={"paper-1"})

        run = scheduler.run_daily_verification(service, delay=0)

        assert run.failed == ["paper-1"]
        assert run.checked == 2
        assert repo.get_paper("paper-1").indexing_status == "NOT_INDEXED"
        assert repo.get_paper("paper-2").indexing_status == "INDEXED"


class TestManualVerification:
    def test_limit_and_status_filter(self, service, repo, journal) -> None:
        for i in range(7):
            repo.create_paper(make_paper(i, "NOT_INDEXED"))
        repo.create_paper(make_paper(99, "PENDING"))

        run = scheduler.trigger_manual_verification(service)

        assert run.checked == scheduler.MANUAL_LIMIT
        assert "paper-99" not in service.verifier.checked


class TestWeeklyReport:
    def test_rows_per_journal(self, service, repo, journal) -> None:
        empty = repo.create_journal(
            Journal(name="Empty", code="EMP", issn="5555-6666", tenant_id="tenant_2")
        )
        repo.create_paper(make_paper(1, "INDEXED"))
        repo.create_paper(make_paper(2, "INDEXED"))
        repo.create_paper(make_paper(3, "NOT_FOUND"))

        rows = {row["journalId"]: row for row in scheduler.run_weekly_report(service)}

        assert rows[journal.id] == {
            "journalId": journal.id,
            "name": journal.name,
            "tenantId": TENANT,
            "totalPapers": 3,
            "indexedPapers": 2,
            "indexingRate": 66.7,
        }
        assert rows[empty.id]["indexingRate"] == 0.0

    def test_half_rate_rounds_up(self, service, repo, journal) -> None:
        """1 of 16 indexed is 6.25%, reported as 6.3."""
        repo.create_paper(make_paper(0, "INDEXED"))
        for i in range(1, 16):
            repo.create_paper(make_paper(i, "NOT_INDEXED"))

        (row,) = scheduler.run_weekly_report(service)

        assert row["indexingRate"] == 6.3
