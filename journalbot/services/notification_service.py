"""Tenant-scoped notifications.

Collaborators that emit events receive a :class:`Notifier` explicitly;
there is no process-global dispatcher.  ``LoggingNotifier`` writes events
to the log, ``MemoryNotifier`` keeps a bounded per-tenant backlog that the
HTTP API exposes for polling.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict, deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Protocol

logger = logging.getLogger(__name__)

NotificationType = Literal["success", "info", "warning", "error"]

MAX_BACKLOG = 100


@dataclass
class Notification:
    """A single event addressed to one tenant."""

    type: NotificationType
    title: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class Notifier(Protocol):
    """Anything that can deliver a notification to a tenant."""

    def notify(self, tenant_id: str, notification: Notification) -> None: ...


class LoggingNotifier:
    """Notifier that only logs events."""

    def notify(self, tenant_id: str, notification: Notification) -> None:
        logger.info("Notification for tenant %s: %s", tenant_id, notification.title)


class MemoryNotifier:
    """Notifier that keeps the most recent events per tenant in memory."""

    def __init__(self, max_backlog: int = MAX_BACKLOG):
        self._events: dict[str, deque[Notification]] = defaultdict(
            lambda: deque(maxlen=max_backlog)
        )
        self._lock = threading.Lock()

    def notify(self, tenant_id: str, notification: Notification) -> None:
        with self._lock:
            self._events[tenant_id].append(notification)
        logger.debug("Queued notification for tenant %s: %s", tenant_id, notification.title)

    def recent(self, tenant_id: str) -> list[Notification]:
        """Events for *tenant_id*, oldest first."""
        with self._lock:
            return list(self._events.get(tenant_id, ()))

    def drain(self, tenant_id: str) -> list[Notification]:
        """Return and clear the events for *tenant_id*."""
        with self._lock:
            events = list(self._events.pop(tenant_id, ()))
        return events


# ---------------------------------------------------------------------------
# Event builders
# ---------------------------------------------------------------------------

def paper_verified(paper_id: str, status: str) -> Notification:
    return Notification(
        type="success" if status == "INDEXED" else "warning",
        title="Paper Verification Complete",
        message=f"Paper verification status: {status}",
        data={"paperId": paper_id, "status": status},
    )


def database_application_updated(journal_name: str, database: str, status: str) -> Notification:
    return Notification(
        type="info",
        title="Database Application Updated",
        message=f"{journal_name} application to {database}: {status}",
        data={"journalName": journal_name, "database": database, "status": status},
    )


def papers_synced(journal_name: str, count: int) -> Notification:
    return Notification(
        type="success",
        title="WordPress Sync Complete",
        message=f"Synced {count} papers for {journal_name}",
        data={"journalName": journal_name, "papersSynced": count},
    )
