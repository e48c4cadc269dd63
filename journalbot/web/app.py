"""FastAPI application for JournalBot."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from journalbot import __version__
from journalbot.config import Settings
from journalbot.database.repository import IndexingRepository
from journalbot.services.indexing_service import IndexingService
from journalbot.services.notification_service import MemoryNotifier
from journalbot.services.scholar_service import ScholarVerifier
from journalbot.services.wordpress_service import WordPressSync
from journalbot.web.errors import register_error_handlers
from journalbot.web.routers import admin, analytics, common, journals, papers
from journalbot.web.state import state


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize services on startup."""
    state.settings = Settings.load()
    state.repo = IndexingRepository(state.settings.db_path)
    state.notifier = MemoryNotifier()
    state.service = IndexingService(
        state.repo,
        verifier=ScholarVerifier(timeout=state.settings.scholar_timeout),
        wordpress=WordPressSync(
            timeout=state.settings.wordpress_timeout,
            per_page=state.settings.wordpress_per_page,
        ),
        notifier=state.notifier,
        recommendation_limit=state.settings.recommendation_limit,
    )
    yield


app = FastAPI(title="JournalBot", version=__version__, lifespan=lifespan)
register_error_handlers(app)

app.include_router(common.router)
app.include_router(journals.router)
app.include_router(papers.router)
app.include_router(admin.router)
app.include_router(analytics.router)
