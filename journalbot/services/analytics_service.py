"""Journal and tenant indexing analytics.

Two pure aggregations over already-loaded, tenant-scoped rows:

* :func:`compute_stats`: per-journal indexing rate, the bounded
  *impact factor estimate*, a placeholder publication-type split and
  per-service acceptance flags.
* :func:`compute_advanced_analytics`: tenant overview, citation
  metrics, a six-month indexing histogram, top papers and per-database
  coverage.

The impact factor estimate is a synthetic score in ``[0, 10]`` derived
only from indexing counts.  It is **not** a bibliometric impact factor
and must be labelled as an estimate wherever it is shown.

Citation figures are drawn at random (uniform integers in
``[0, MAX_SIMULATED_CITATIONS)``) because no citation source is wired in.
They are placeholder values and are not reproducible unless a seeded
``random.Random`` is passed as *rng*.
"""

from __future__ import annotations

import calendar
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Sequence

from journalbot.models.journal import DatabaseApplication, DatabaseConfig, Journal
from journalbot.models.paper import Paper
from journalbot.utils.numbers import percentage, round_half_up
from journalbot.utils.text import parse_date

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
IMPACT_FACTOR_CAP = 10.0
RESEARCH_ARTICLE_SHARE = 0.8
TREND_MONTHS = 6
TOP_PAPERS = 5
MAX_SIMULATED_CITATIONS = 50
I10_THRESHOLD = 10
AVG_DAYS_TO_INDEX = 7  # placeholder, no indexing timestamps are tracked

INDEXED = "INDEXED"
ACCEPTED = "ACCEPTED"

# Service key → name fragment matched (case-insensitively) against config names
SERVICE_NAMES = {
    "scopus": "Scopus",
    "pubmed": "PubMed",
    "doaj": "DOAJ",
}


# ---------------------------------------------------------------------------
# Result data classes
# ---------------------------------------------------------------------------

@dataclass
class IndexingByService:
    """Indexing presence per service.

    ``scholar`` is a **count** of indexed papers while the other fields are
    booleans.  The asymmetry is part of the public JSON shape.
    """

    scholar: int = 0
    scopus: bool = False
    pubmed: bool = False
    doaj: bool = False


@dataclass
class JournalStats:
    """Derived indexing metrics for one journal."""

    total_papers: int = 0
    indexed_papers: int = 0
    indexing_rate: int = 0
    impact_factor_estimate: float = 0
    publications_by_type: dict[str, int] = field(default_factory=dict)
    indexing_by_service: IndexingByService = field(default_factory=IndexingByService)

    def to_dict(self) -> dict[str, Any]:
        service = self.indexing_by_service
        return {
            "totalPapers": self.total_papers,
            "indexedPapers": self.indexed_papers,
            "indexingRate": self.indexing_rate,
            "impactFactorEstimate": self.impact_factor_estimate,
            "publicationsByType": dict(self.publications_by_type),
            "indexingByService": {
                "scholar": service.scholar,
                "scopus": service.scopus,
                "pubmed": service.pubmed,
                "doaj": service.doaj,
            },
        }


@dataclass
class TrendBucket:
    month: str
    indexed: int = 0
    not_indexed: int = 0


@dataclass
class TopPaper:
    id: Optional[str]
    title: str
    citations: int
    indexing_status: str


@dataclass
class DatabaseCoverage:
    name: str
    journals_indexed: int
    total_journals: int
    coverage: float


@dataclass
class AdvancedAnalytics:
    """Tenant-wide analytics payload."""

    total_papers: int
    indexed_papers: int
    indexing_trend: float
    avg_time_to_index: int
    total_citations: int
    h_index: int
    i10_index: int
    avg_citations_per_paper: float
    indexing_trends: list[TrendBucket] = field(default_factory=list)
    top_papers: list[TopPaper] = field(default_factory=list)
    database_coverage: list[DatabaseCoverage] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overview": {
                "totalPapers": self.total_papers,
                "indexedPapers": self.indexed_papers,
                "indexingTrend": self.indexing_trend,
                "avgTimeToIndex": self.avg_time_to_index,
            },
            "citationMetrics": {
                "totalCitations": self.total_citations,
                "hIndex": self.h_index,
                "i10Index": self.i10_index,
                "avgCitationsPerPaper": self.avg_citations_per_paper,
            },
            "indexingTrends": [
                {"month": b.month, "indexed": b.indexed, "notIndexed": b.not_indexed}
                for b in self.indexing_trends
            ],
            "topPapers": [
                {
                    "id": p.id,
                    "title": p.title,
                    "citations": p.citations,
                    "indexingStatus": p.indexing_status,
                }
                for p in self.top_papers
            ],
            "databaseCoverage": [
                {
                    "name": c.name,
                    "journalsIndexed": c.journals_indexed,
                    "totalJournals": c.total_journals,
                    "coverage": c.coverage,
                }
                for c in self.database_coverage
            ],
        }


# ---------------------------------------------------------------------------
# Per-journal stats
# ---------------------------------------------------------------------------

def count_indexed(papers: Iterable[Paper]) -> int:
    return sum(1 for p in papers if p.indexing_status == INDEXED)


def impact_factor_estimate(total_papers: int, indexed_papers: int) -> float:
    """Bounded synthetic score: ``min(1.5·i / (t/2) + 0.1·i, 10)`` to 2 places."""
    if total_papers <= 0:
        return 0
    base = (indexed_papers * 1.5) / (total_papers / 2)
    return round_half_up(min(base + indexed_papers * 0.1, IMPACT_FACTOR_CAP), 2)


def publications_by_type(total_papers: int) -> dict[str, int]:
    """Fixed 80/20 display split; papers carry no type field."""
    articles = int(round_half_up(total_papers * RESEARCH_ARTICLE_SHARE))
    return {
        "Research Article": articles,
        "Review": max(0, total_papers - articles),
    }


def has_accepted_application(
    applications: Iterable[DatabaseApplication],
    service_name: str,
) -> bool:
    """True if an ACCEPTED application targets a database whose name contains *service_name*."""
    needle = service_name.lower()
    return any(
        app.status == ACCEPTED and needle in (app.database_name or "").lower()
        for app in applications
    )


def compute_stats(
    papers: Sequence[Paper],
    applications: Sequence[DatabaseApplication],
) -> JournalStats:
    """Compute :class:`JournalStats` for one journal's papers and applications."""
    total = len(papers)
    indexed = count_indexed(papers)

    return JournalStats(
        total_papers=total,
        indexed_papers=indexed,
        indexing_rate=int(round_half_up(percentage(indexed, total))),
        impact_factor_estimate=impact_factor_estimate(total, indexed),
        publications_by_type=publications_by_type(total),
        indexing_by_service=IndexingByService(
            scholar=indexed,
            **{
                key: has_accepted_application(applications, name)
                for key, name in SERVICE_NAMES.items()
            },
        ),
    )


# ---------------------------------------------------------------------------
# Tenant-wide analytics
# ---------------------------------------------------------------------------

def simulate_citations(papers: Sequence[Paper], rng: Optional[random.Random] = None) -> list[int]:
    """One random citation count per paper (placeholder data)."""
    rng = rng or random.Random()
    return [rng.randrange(MAX_SIMULATED_CITATIONS) for _ in papers]


def h_index(citations: Iterable[int]) -> int:
    """Largest h such that h papers have at least h citations each."""
    h = 0
    for rank, count in enumerate(sorted(citations, reverse=True), 1):
        if count >= rank:
            h = rank
        else:
            break
    return h


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def indexing_trends(
    papers: Iterable[Paper],
    now: datetime,
    months: int = TREND_MONTHS,
) -> list[TrendBucket]:
    """Indexed / not-indexed paper counts per creation month, oldest first.

    Covers the *months* calendar months ending with the month of *now*.
    Papers whose ``created_at`` cannot be parsed are not counted.
    """
    buckets: dict[tuple[int, int], TrendBucket] = {}
    for delta in range(months - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -delta)
        buckets[(year, month)] = TrendBucket(month=f"{calendar.month_abbr[month]} {year}")

    for paper in papers:
        created = parse_date(paper.created_at)
        if created is None:
            continue
        bucket = buckets.get((created.year, created.month))
        if bucket is None:
            continue
        if paper.indexing_status == INDEXED:
            bucket.indexed += 1
        else:
            bucket.not_indexed += 1

    return list(buckets.values())


def top_papers(
    papers: Sequence[Paper],
    citations: Sequence[int],
    limit: int = TOP_PAPERS,
) -> list[TopPaper]:
    """Papers with the most (simulated) citations; ties keep input order."""
    pairs = sorted(zip(papers, citations), key=lambda pc: pc[1], reverse=True)
    return [
        TopPaper(
            id=paper.id,
            title=paper.title,
            citations=count,
            indexing_status=paper.indexing_status,
        )
        for paper, count in pairs[:limit]
    ]


def database_coverage(
    journals: Sequence[Journal],
    database_configs: Sequence[DatabaseConfig],
    applications_by_db: Mapping[str, Sequence[DatabaseApplication]],
) -> list[DatabaseCoverage]:
    """Share of the tenant's journals accepted by each database, in percent."""
    total_journals = len(journals)
    coverage = []
    for config in database_configs:
        accepted = sum(
            1 for app in applications_by_db.get(config.id or "", []) if app.status == ACCEPTED
        )
        coverage.append(
            DatabaseCoverage(
                name=config.name,
                journals_indexed=accepted,
                total_journals=total_journals,
                coverage=percentage(accepted, total_journals),
            )
        )
    return coverage


def compute_advanced_analytics(
    papers: Sequence[Paper],
    journals: Sequence[Journal],
    database_configs: Sequence[DatabaseConfig],
    applications_by_db: Mapping[str, Sequence[DatabaseApplication]],
    *,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> AdvancedAnalytics:
    """Compute tenant-wide :class:`AdvancedAnalytics`.

    Args:
        papers: All of the tenant's papers
        journals: All of the tenant's journals
        database_configs: The tenant's indexing databases
        applications_by_db: Applications keyed by database config id
        now: Reference time for the trend window (defaults to current UTC time)
        rng: Random source for simulated citations

    Returns:
        Analytics payload; citation fields are simulated
    """
    now = now or datetime.now(timezone.utc)
    total = len(papers)
    indexed = count_indexed(papers)

    citations = simulate_citations(papers, rng)
    total_citations = sum(citations)

    logger.debug(
        "Computed analytics over %d papers, %d journals, %d databases",
        total,
        len(journals),
        len(database_configs),
    )

    return AdvancedAnalytics(
        total_papers=total,
        indexed_papers=indexed,
        indexing_trend=percentage(indexed, total),
        avg_time_to_index=AVG_DAYS_TO_INDEX,
        total_citations=total_citations,
        h_index=h_index(citations),
        i10_index=sum(1 for c in citations if c >= I10_THRESHOLD),
        avg_citations_per_paper=total_citations / total if total else 0.0,
        indexing_trends=indexing_trends(papers, now),
        top_papers=top_papers(papers, citations),
        database_coverage=database_coverage(journals, database_configs, applications_by_db),
    )
