"""Console UI for terminal output using Rich."""

from typing import Any

from rich.console import Console
from rich.table import Table

from journalbot.services.analytics_service import AdvancedAnalytics, JournalStats
from journalbot.services.recommendation_service import RecommendationEntry


class ConsoleUI:
    """Rich-based console UI for recommendations, stats and job results."""

    def __init__(self):
        """Initialize console."""
        self._console = Console()

    @property
    def console(self) -> Console:
        return self._console

    def info(self, message: str) -> None:
        """Print an info message."""
        self._console.print(message)

    def success(self, message: str) -> None:
        """Print a success message in green."""
        self._console.print(f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Print an error message in red."""
        self._console.print(f"[red]Error:[/red] {message}")

    def display_recommendations(self, paper_title: str, entries: list[RecommendationEntry]) -> None:
        """Display ranked reviewers in a table."""
        table = Table(title=f"Reviewers for: {paper_title}")
        table.add_column("#", justify="right")
        table.add_column("Reviewer")
        table.add_column("Email", overflow="fold")
        table.add_column("Institution", overflow="fold")
        table.add_column("Score", justify="right")
        table.add_column("Matched", overflow="fold")

        for rank, entry in enumerate(entries, 1):
            table.add_row(
                str(rank),
                f"{entry.first_name} {entry.last_name}",
                entry.email,
                entry.institution or "-",
                str(entry.score),
                ", ".join(entry.matched_keywords) or "-",
            )

        self._console.print(table)
        if not entries:
            self._console.print("No matching reviewers found.")

    def display_stats(self, journal_name: str, stats: JournalStats) -> None:
        """Display journal stats as a two-column table."""
        table = Table(title=f"Indexing stats: {journal_name}", show_header=False)
        table.add_column("Metric")
        table.add_column("Value", justify="right")

        table.add_row("Total papers", str(stats.total_papers))
        table.add_row("Indexed papers", str(stats.indexed_papers))
        table.add_row("Indexing rate", f"{stats.indexing_rate}%")
        table.add_row("Impact factor (estimate)", f"{stats.impact_factor_estimate}")
        for label, count in stats.publications_by_type.items():
            table.add_row(label, str(count))
        service = stats.indexing_by_service
        table.add_row("Scholar (indexed papers)", str(service.scholar))
        table.add_row("Scopus", _yes_no(service.scopus))
        table.add_row("PubMed", _yes_no(service.pubmed))
        table.add_row("DOAJ", _yes_no(service.doaj))

        self._console.print(table)
        self._console.print(
            "[dim]Impact factor is a synthetic estimate from indexing counts, "
            "not a citation-based impact factor.[/dim]"
        )

    def display_analytics(self, tenant_id: str, analytics: AdvancedAnalytics) -> None:
        """Display tenant analytics: overview, trend and coverage tables."""
        self._console.print(
            f"[bold]Tenant {tenant_id}[/bold]: {analytics.total_papers} papers, "
            f"{analytics.indexed_papers} indexed ({analytics.indexing_trend:.1f}%)"
        )
        self._console.print(
            f"Citations (simulated): total {analytics.total_citations}, "
            f"h-index {analytics.h_index}, i10-index {analytics.i10_index}"
        )

        trend = Table(title="Indexing trend (by month added)")
        trend.add_column("Month")
        trend.add_column("Indexed", justify="right")
        trend.add_column("Not indexed", justify="right")
        for bucket in analytics.indexing_trends:
            trend.add_row(bucket.month, str(bucket.indexed), str(bucket.not_indexed))
        self._console.print(trend)

        coverage = Table(title="Database coverage")
        coverage.add_column("Database")
        coverage.add_column("Journals accepted", justify="right")
        coverage.add_column("Coverage", justify="right")
        for row in analytics.database_coverage:
            coverage.add_row(
                row.name,
                f"{row.journals_indexed}/{row.total_journals}",
                f"{row.coverage:.0f}%",
            )
        self._console.print(coverage)

    def display_report(self, rows: list[dict[str, Any]]) -> None:
        """Display the weekly per-journal indexing report."""
        table = Table(title="Weekly indexing report")
        table.add_column("Journal", overflow="fold")
        table.add_column("Tenant")
        table.add_column("Papers", justify="right")
        table.add_column("Indexed", justify="right")
        table.add_column("Rate", justify="right")
        for row in rows:
            table.add_row(
                row["name"],
                row["tenantId"],
                str(row["totalPapers"]),
                str(row["indexedPapers"]),
                f"{row['indexingRate']:.1f}%",
            )
        self._console.print(table)
        if not rows:
            self._console.print("No journals found.")

    def verification_result(self, paper_title: str, result: dict[str, Any]) -> None:
        status = result["paper"]["indexingStatus"]
        color = "green" if result["isIndexed"] else "yellow"
        note = " (simulated)" if result.get("simulated") else ""
        self._console.print(f"[{color}]{status}[/{color}]{note}: {paper_title}")

    def verification_summary(self, run: dict[str, Any]) -> None:
        self._console.print(
            f"\n[green]Done.[/green] Verified [bold]{run['verified']}[/bold] papers, "
            f"{run['indexed']} indexed"
        )
        if run["failed"]:
            self.warning(f"Failed: {run['failed']}")


def _yes_no(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "no"
