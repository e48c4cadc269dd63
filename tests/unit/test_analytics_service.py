"""Unit tests for journal stats and tenant analytics."""

import random
from datetime import datetime, timezone

from journalbot.models.journal import Journal
from journalbot.services.analytics_service import (
    compute_advanced_analytics,
    compute_stats,
    h_index,
    impact_factor_estimate,
    indexing_trends,
    publications_by_type,
)
from tests.factories import TENANT, make_application, make_config, make_paper


def _papers(total: int, indexed: int) -> list:
    return [make_paper(i, "INDEXED" if i < indexed else "NOT_INDEXED") for i in range(total)]


class TestComputeStats:
    """Test suite for compute_stats."""

    def test_ten_papers_six_indexed(self) -> None:
        stats = compute_stats(_papers(10, 6), [])

        assert stats.total_papers == 10
        assert stats.indexed_papers == 6
        assert stats.indexing_rate == 60
        assert stats.impact_factor_estimate == 2.4

    def test_no_papers(self) -> None:
        data = compute_stats([], []).to_dict()

        assert data["totalPapers"] == 0
        assert data["indexedPapers"] == 0
        assert data["indexingRate"] == 0
        assert data["impactFactorEstimate"] == 0
        assert data["publicationsByType"] == {"Research Article": 0, "Review": 0}
        assert data["indexingByService"] == {
            "scholar": 0,
            "scopus": False,
            "pubmed": False,
            "doaj": False,
        }

    def test_indexing_rate_rounds_half_up(self) -> None:
        """1 of 8 indexed is 12.5%, reported as 13."""
        assert compute_stats(_papers(8, 1), []).indexing_rate == 13

    def test_scholar_is_indexed_count(self) -> None:
        stats = compute_stats(_papers(5, 3), [])

        assert stats.to_dict()["indexingByService"]["scholar"] == 3

    def test_service_flags_require_accepted_status(self) -> None:
        applications = [
            make_application("Scopus", "ACCEPTED"),
            make_application("PubMed Central", "UNDER_REVIEW"),
            make_application("DOAJ", "REJECTED"),
        ]

        service = compute_stats([], applications).indexing_by_service

        assert service.scopus is True
        assert service.pubmed is False
        assert service.doaj is False

    def test_service_names_match_by_substring(self) -> None:
        applications = [
            make_application("Pseudo-Scopus Clone"),
            make_application("pubmed"),
            make_application("Directory of Open Access Journals"),
        ]

        service = compute_stats([], applications).indexing_by_service

        assert service.scopus is True
        assert service.pubmed is True
        # "doaj" does not occur in the long-form name
        assert service.doaj is False


class TestImpactFactorEstimate:
    """Test suite for the bounded impact factor estimate."""

    def test_zero_papers(self) -> None:
        assert impact_factor_estimate(0, 0) == 0

    def test_capped_at_ten(self) -> None:
        assert impact_factor_estimate(10_000, 10_000) == 10

    def test_monotonic_in_indexed_count(self) -> None:
        values = [impact_factor_estimate(40, i) for i in range(41)]

        assert values == sorted(values)

    def test_two_decimal_places(self) -> None:
        # 3 of 7: 4.5 / 3.5 + 0.3 = 1.5857...
        assert impact_factor_estimate(7, 3) == 1.59


class TestPublicationsByType:
    def test_eighty_twenty_split(self) -> None:
        assert publications_by_type(10) == {"Research Article": 8, "Review": 2}

    def test_rounding(self) -> None:
        # 0.8 * 3 = 2.4 → 2 articles, 1 review
        assert publications_by_type(3) == {"Research Article": 2, "Review": 1}
        # 0.8 * 1 = 0.8 → 1 article, 0 reviews
        assert publications_by_type(1) == {"Research Article": 1, "Review": 0}


class TestHIndex:
    def test_empty(self) -> None:
        assert h_index([]) == 0

    def test_typical(self) -> None:
        assert h_index([10, 8, 5, 4, 3]) == 4
        assert h_index([25, 8, 5, 3, 3]) == 3
        assert h_index([0, 0, 0]) == 0


class TestIndexingTrends:
    def test_six_months_oldest_first(self) -> None:
        now = datetime(2026, 3, 15, tzinfo=timezone.utc)

        buckets = indexing_trends([], now)

        assert [b.month for b in buckets] == [
            "Oct 2025",
            "Nov 2025",
            "Dec 2025",
            "Jan 2026",
            "Feb 2026",
            "Mar 2026",
        ]

    def test_papers_bucketed_by_creation_month(self) -> None:
        now = datetime(2026, 10, 18, tzinfo=timezone.utc)
        papers = [
            make_paper(1, "INDEXED", created_at="2026-10-02T09:00:00+00:00"),
            make_paper(2, "PENDING", created_at="2026-10-05T09:00:00+00:00"),
            make_paper(3, "INDEXED", created_at="2026-06-30T09:00:00+00:00"),
            make_paper(4, "INDEXED", created_at="2026-04-30T09:00:00+00:00"),  # outside window
            make_paper(5, "INDEXED", created_at="2025-10-10T09:00:00+00:00"),  # same month, last year
        ]

        buckets = {b.month: b for b in indexing_trends(papers, now)}

        assert (buckets["Oct 2026"].indexed, buckets["Oct 2026"].not_indexed) == (1, 1)
        assert (buckets["Jun 2026"].indexed, buckets["Jun 2026"].not_indexed) == (1, 0)
        assert sum(b.indexed + b.not_indexed for b in buckets.values()) == 3


class TestComputeAdvancedAnalytics:
    """Structural checks only: citation values are random."""

    def test_empty_tenant(self) -> None:
        result = compute_advanced_analytics([], [], [], {}).to_dict()

        assert result["overview"] == {
            "totalPapers": 0,
            "indexedPapers": 0,
            "indexingTrend": 0,
            "avgTimeToIndex": 7,
        }
        assert result["citationMetrics"]["totalCitations"] == 0
        assert result["citationMetrics"]["avgCitationsPerPaper"] == 0
        assert len(result["indexingTrends"]) == 6
        assert result["topPapers"] == []
        assert result["databaseCoverage"] == []

    def test_coverage_and_top_papers(self) -> None:
        papers = _papers(8, 2)
        journals = [
            Journal(id=f"j{i}", name=f"J{i}", code=f"J{i}", issn="1234-5678", tenant_id=TENANT)
            for i in range(4)
        ]
        configs = [make_config("Scopus"), make_config("DOAJ")]
        applications_by_db = {
            "db-scopus": [
                make_application("Scopus", "ACCEPTED", journal_id="j0"),
                make_application("Scopus", "ACCEPTED", journal_id="j1"),
                make_application("Scopus", "PENDING", journal_id="j2"),
            ],
        }

        result = compute_advanced_analytics(
            papers, journals, configs, applications_by_db, rng=random.Random(7)
        )

        assert result.indexing_trend == 25
        coverage = {c.name: c for c in result.database_coverage}
        assert coverage["Scopus"].journals_indexed == 2
        assert coverage["Scopus"].total_journals == 4
        assert coverage["Scopus"].coverage == 50
        assert coverage["DOAJ"].coverage == 0

        assert len(result.top_papers) == 5
        citations = [p.citations for p in result.top_papers]
        assert citations == sorted(citations, reverse=True)
        assert all(0 <= c < 50 for c in citations)
        assert 0 <= result.h_index <= len(papers)
        assert result.i10_index <= len(papers)

    def test_coverage_without_journals_is_zero(self) -> None:
        result = compute_advanced_analytics(
            [], [], [make_config("Scopus")], {"db-scopus": [make_application("Scopus")]}
        )

        assert result.database_coverage[0].coverage == 0
