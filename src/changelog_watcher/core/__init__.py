"""Core domain layer."""

from changelog_watcher.core.entities import (
    CheckResult,
    CheckStatus,
    DateFormat,
    Entry,
    Failure,
    FetchedContent,
    IdentifierKind,
    NotificationResult,
    Snapshot,
    Source,
    SourceKind,
)
from changelog_watcher.core.interfaces import ContentFetcher, NotificationService, WatermarkStore
from changelog_watcher.core.watermark_store import FileWatermarkStore

__all__ = [
    "CheckResult",
    "CheckStatus",
    "DateFormat",
    "Entry",
    "Failure",
    "FetchedContent",
    "IdentifierKind",
    "NotificationResult",
    "Snapshot",
    "Source",
    "SourceKind",
    "ContentFetcher",
    "NotificationService",
    "WatermarkStore",
    "FileWatermarkStore",
]
