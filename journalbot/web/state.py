"""Application state shared by the routers."""

from journalbot.config import Settings
from journalbot.database.repository import IndexingRepository
from journalbot.services.indexing_service import IndexingService
from journalbot.services.notification_service import MemoryNotifier


class AppState:
    """Mutable singleton holding the runtime services.

    Populated by the app lifespan; tests may replace individual services
    (e.g. ``state.service.verifier``) after startup.
    """

    settings: Settings
    repo: IndexingRepository
    service: IndexingService
    notifier: MemoryNotifier


state = AppState()
