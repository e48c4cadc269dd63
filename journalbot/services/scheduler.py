"""Periodic jobs: Scholar re-verification and the weekly indexing report.

The jobs are plain functions; the process scheduler (cron) invokes them
through the CLI, e.g.::

    0 2 * * *  journalbot verify-pending     # daily at 02:00
    0 3 * * 1  journalbot report             # Mondays at 03:00
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from journalbot.exceptions import JournalBotError
from journalbot.services.indexing_service import IndexingService
from journalbot.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

DAILY_SCHEDULE = "0 2 * * *"
WEEKLY_SCHEDULE = "0 3 * * 1"

BATCH_SIZE = 50
STALE_DAYS = 7
DELAY_SECONDS = 2.0
MANUAL_LIMIT = 5


@dataclass
class VerificationRun:
    """Summary of one verification batch."""

    checked: int = 0
    indexed: int = 0
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"verified": self.checked, "indexed": self.indexed, "failed": list(self.failed)}


def _verify_each(
    service: IndexingService,
    paper_ids: list[str],
    delay: float,
    sleep: Callable[[float], None],
) -> VerificationRun:
    run = VerificationRun()
    for i, paper_id in enumerate(paper_ids):
        try:
            result = service.verify_paper(paper_id)
        except (JournalBotError, OSError) as e:
            logger.error("Failed to verify paper %s: %s", paper_id, e)
            run.failed.append(paper_id)
            continue
        run.checked += 1
        if result["isIndexed"]:
            run.indexed += 1
        if delay > 0 and i < len(paper_ids) - 1:
            sleep(delay)
    return run


def run_daily_verification(
    service: IndexingService,
    now: Optional[datetime] = None,
    batch_size: int = BATCH_SIZE,
    stale_days: int = STALE_DAYS,
    delay: float = DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> VerificationRun:
    """Re-check papers that are NOT_INDEXED or unchecked for *stale_days*.

    At most *batch_size* papers are checked, with *delay* seconds between
    requests.  A failure on one paper is logged and the batch continues.
    """
    now = now or datetime.now(timezone.utc)
    stale_before = (now - timedelta(days=stale_days)).isoformat()
    papers = service.repo.papers_due_for_verification(stale_before, batch_size)
    logger.info("Found %d papers to verify", len(papers))

    run = _verify_each(service, [p.id for p in papers if p.id], delay, sleep)
    logger.info(
        "Daily verification completed: %d checked, %d indexed, %d failed",
        run.checked,
        run.indexed,
        len(run.failed),
    )
    return run


def trigger_manual_verification(
    service: IndexingService,
    limit: int = MANUAL_LIMIT,
) -> VerificationRun:
    """Immediately check up to *limit* NOT_INDEXED papers, without delays."""
    logger.info("Manual verification triggered")
    papers = service.repo.list_papers(indexing_status="NOT_INDEXED", limit=limit)
    return _verify_each(service, [p.id for p in papers if p.id], 0, time.sleep)


def run_weekly_report(service: IndexingService) -> list[dict]:
    """Indexing rate per journal, across all tenants."""
    rows = []
    for journal in service.repo.list_journals():
        stats = service.get_journal_stats(journal.id)  # type: ignore[arg-type]
        rate = stats.indexed_papers / stats.total_papers * 100 if stats.total_papers else 0.0
        logger.info("Journal %s: %.1f%% indexed", journal.name, rate)
        rows.append(
            {
                "journalId": journal.id,
                "name": journal.name,
                "tenantId": journal.tenant_id,
                "totalPapers": stats.total_papers,
                "indexedPapers": stats.indexed_papers,
                "indexingRate": round_half_up(rate, 1),
            }
        )
    return rows
