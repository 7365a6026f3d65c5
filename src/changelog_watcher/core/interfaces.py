"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from changelog_watcher.core.entities import NotificationResult, Snapshot


class ContentFetcher(ABC):
    """Interface for obtaining raw page content."""

    @abstractmethod
    async def fetch(self, url: str) -> Optional[str]:
        """Fetch content at url, or None after retries are exhausted."""
        pass

    @abstractmethod
    async def find_latest_snapshot(self, url: str) -> Optional[Snapshot]:
        """Find the most recent archived snapshot of url."""
        pass


class WatermarkStore(ABC):
    """Interface for persisting the last reported identifier per source."""

    @abstractmethod
    def read(self, source_id: str) -> Optional[str]:
        """Return the stored identifier, or None on first run."""
        pass

    @abstractmethod
    def write(self, source_id: str, identifier: str) -> None:
        """Persist identifier for source_id."""
        pass


class NotificationService(ABC):
    """Interface for sending change notifications."""

    @abstractmethod
    async def send(
        self, source_name: str, version_label: str, change_summary: str
    ) -> NotificationResult:
        """Send a change notification."""
        pass
