"""Pytest configuration and shared fixtures."""

import pytest

from journalbot.config import Settings
from journalbot.database.repository import IndexingRepository
from journalbot.models.journal import Journal
from journalbot.models.paper import Paper
from journalbot.services.indexing_service import IndexingService
from journalbot.services.notification_service import MemoryNotifier
from journalbot.services.scholar_service import VerificationResult
from tests.factories import TENANT


class StubVerifier:
    """Scholar verifier returning a fixed answer without network access."""

    def __init__(self, is_indexed: bool = True):
        self.is_indexed = is_indexed
        self.checked: list[str] = []

    def verify(self, paper: Paper) -> VerificationResult:
        self.checked.append(paper.id)
        url = f"https://scholar.google.com/scholar?q={paper.doi}" if self.is_indexed else ""
        return VerificationResult(is_indexed=self.is_indexed, scholar_url=url)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path):
    """Give every test its own Settings singleton rooted in a temp directory."""
    Settings.reset()
    settings = Settings.load(base_dir=tmp_path)
    yield settings
    Settings.reset()


@pytest.fixture
def repo(tmp_path) -> IndexingRepository:
    """Empty repository backed by a temporary SQLite file."""
    return IndexingRepository(tmp_path / "test_journals.db")


@pytest.fixture
def notifier() -> MemoryNotifier:
    return MemoryNotifier()


@pytest.fixture
def stub_verifier() -> StubVerifier:
    return StubVerifier()


@pytest.fixture
def service(repo, notifier, stub_verifier) -> IndexingService:
    return IndexingService(repo, verifier=stub_verifier, notifier=notifier)


@pytest.fixture
def journal(repo) -> Journal:
    return repo.create_journal(
        Journal(
            id="journal-1",
            name="International Journal of STM Research",
            code="IJSR",
            issn="1234-5678",
            tenant_id=TENANT,
            wordpress_url="https://journal-example.com",
        )
    )


@pytest.fixture
def sample_paper() -> Paper:
    return Paper(
        id="paper-1",
        title="Machine Learning in Academic Indexing",
        authors="John Doe,Jane Smith",
        doi="10.1234/ijsr.2023.001",
        journal_id="journal-1",
        tenant_id=TENANT,
        pub_date="2023-05-01",
    )
