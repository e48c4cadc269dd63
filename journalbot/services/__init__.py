"""Service layer."""

from journalbot.services.analytics_service import (
    AdvancedAnalytics,
    JournalStats,
    compute_advanced_analytics,
    compute_stats,
)
from journalbot.services.indexing_service import IndexingService
from journalbot.services.notification_service import (
    LoggingNotifier,
    MemoryNotifier,
    Notification,
    Notifier,
)
from journalbot.services.recommendation_service import RecommendationEntry, recommend
from journalbot.services.scholar_service import ScholarVerifier, VerificationResult
from journalbot.services.wordpress_service import WordPressSync

__all__ = [
    "AdvancedAnalytics",
    "IndexingService",
    "JournalStats",
    "LoggingNotifier",
    "MemoryNotifier",
    "Notification",
    "Notifier",
    "RecommendationEntry",
    "ScholarVerifier",
    "VerificationResult",
    "WordPressSync",
    "compute_advanced_analytics",
    "compute_stats",
    "recommend",
]
