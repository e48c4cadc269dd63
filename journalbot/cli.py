"""Command-line interface handlers."""

import argparse
import asyncio
import random
import sys
from typing import Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from journalbot.config import Settings
from journalbot.console import ConsoleUI
from journalbot.database.repository import IndexingRepository
from journalbot.exceptions import JournalBotError
from journalbot.logging_config import setup_logging
from journalbot.services import scheduler
from journalbot.services.indexing_service import IndexingService
from journalbot.services.scholar_service import ScholarVerifier
from journalbot.services.wordpress_service import WordPressSync


class JournalBotCLI:
    """CLI application for JournalBot."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize CLI with settings.

        Args:
            settings: Application settings (loads from .metadata if not provided)
        """
        self.settings = settings or Settings.load()
        self.ui = ConsoleUI()
        self.repo = IndexingRepository(self.settings.db_path)
        self.service = IndexingService(
            self.repo,
            verifier=ScholarVerifier(timeout=self.settings.scholar_timeout),
            wordpress=WordPressSync(
                timeout=self.settings.wordpress_timeout,
                per_page=self.settings.wordpress_per_page,
            ),
            recommendation_limit=self.settings.recommendation_limit,
        )

    def cmd_recommend(self, paper_id: str) -> None:
        """Show the top reviewers for a paper."""
        paper = self.service.require_paper(paper_id)
        entries = self.service.recommend_reviewers(paper_id)
        self.ui.display_recommendations(paper.title, entries)

    def cmd_stats(self, journal_id: str) -> None:
        """Show indexing stats for a journal."""
        journal = self.service.require_journal(journal_id)
        self.ui.display_stats(journal.name, self.service.get_journal_stats(journal_id))

    def cmd_analytics(self, tenant_id: str, seed: Optional[int] = None) -> None:
        """Show tenant analytics (pass *seed* for repeatable simulated citations)."""
        rng = random.Random(seed) if seed is not None else None
        analytics = self.service.get_advanced_analytics(tenant_id, rng=rng)
        self.ui.display_analytics(tenant_id, analytics)

    def cmd_verify(self, paper_id: str) -> None:
        """Check one paper on Google Scholar."""
        paper = self.service.require_paper(paper_id)
        result = self.service.verify_paper(paper_id)
        self.ui.verification_result(paper.title, result)

    def cmd_sync(self, journal_id: str) -> None:
        """Import a journal's WordPress posts as papers."""
        result = asyncio.run(self.service.sync_journal(journal_id))
        self.ui.success(result["message"])

    def cmd_verify_pending(self, manual: bool = False) -> None:
        """Run the daily verification batch (or the small manual one)."""
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            console=self.ui.console,
        ) as progress:
            progress.add_task("Verifying papers on Google Scholar...", total=None)
            if manual:
                run = scheduler.trigger_manual_verification(
                    self.service, limit=self.settings.manual_verification_limit
                )
            else:
                run = scheduler.run_daily_verification(
                    self.service,
                    batch_size=self.settings.verification_batch_size,
                    stale_days=self.settings.verification_stale_days,
                    delay=self.settings.verification_delay,
                )
        self.ui.verification_summary(run.to_dict())

    def cmd_report(self) -> None:
        """Print the weekly per-journal indexing report."""
        self.ui.display_report(scheduler.run_weekly_report(self.service))

    def cmd_serve(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        """Run the HTTP API with uvicorn."""
        import uvicorn

        uvicorn.run(
            "journalbot.web.app:app",
            host=host or self.settings.host,
            port=port or self.settings.port,
        )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="journalbot",
        description="Journal indexing administration: reviewers, analytics, Scholar checks",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: settings)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: settings)")

    # recommend command
    recommend_parser = subparsers.add_parser("recommend", help="Recommend reviewers for a paper")
    recommend_parser.add_argument("paper_id", help="Paper ID")

    # stats command
    stats_parser = subparsers.add_parser("stats", help="Show indexing stats for a journal")
    stats_parser.add_argument("journal_id", help="Journal ID")

    # analytics command
    analytics_parser = subparsers.add_parser("analytics", help="Show tenant-wide analytics")
    analytics_parser.add_argument("tenant_id", help="Tenant ID")
    analytics_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the simulated citation counts",
    )

    # verify command
    verify_parser = subparsers.add_parser("verify", help="Check one paper on Google Scholar")
    verify_parser.add_argument("paper_id", help="Paper ID")

    # sync command
    sync_parser = subparsers.add_parser("sync", help="Import papers from a journal's WordPress")
    sync_parser.add_argument("journal_id", help="Journal ID")

    # verify-pending command
    pending_parser = subparsers.add_parser(
        "verify-pending",
        help="Re-check papers not yet indexed (daily job)",
    )
    pending_parser.add_argument(
        "--manual",
        action="store_true",
        help="Check only a few NOT_INDEXED papers, without delays",
    )

    # report command
    subparsers.add_parser("report", help="Per-journal indexing report (weekly job)")

    return parser


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Parse *argv* and run the selected command. Returns the exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = Settings.load()
    setup_logging(settings.log_level, settings.metadata_dir)
    cli = JournalBotCLI(settings)

    try:
        if args.command == "serve":
            cli.cmd_serve(args.host, args.port)
        elif args.command == "recommend":
            cli.cmd_recommend(args.paper_id)
        elif args.command == "stats":
            cli.cmd_stats(args.journal_id)
        elif args.command == "analytics":
            cli.cmd_analytics(args.tenant_id, args.seed)
        elif args.command == "verify":
            cli.cmd_verify(args.paper_id)
        elif args.command == "sync":
            cli.cmd_sync(args.journal_id)
        elif args.command == "verify-pending":
            cli.cmd_verify_pending(args.manual)
        elif args.command == "report":
            cli.cmd_report()
    except JournalBotError as e:
        cli.ui.error(str(e))
        return 1
    return 0


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run_cli())
