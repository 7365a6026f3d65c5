"""Core domain entities."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SourceKind(str, Enum):
    """How entries are extracted from a source."""

    SEMVER_CHANGELOG = "semver-changelog"
    DATED_PAGE = "dated-page"
    DATED_BLOG = "dated-blog"


class DateFormat(str, Enum):
    """Literal date formats recognised on dated pages."""

    DOTTED = "YYYY.MM.DD"
    MONTH_DAY_YEAR = "Month D, YYYY"


class IdentifierKind(str, Enum):
    """Ordering rule applied to identifiers."""

    VERSION = "version"
    DATE = "date"


@dataclass(frozen=True)
class Source:
    """Monitored changelog, release-notes page or blog."""

    id: str
    name: str
    url: str
    kind: SourceKind
    display_url: str
    date_format: Optional[DateFormat] = None
    archived: bool = False
    link_pattern: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Source id cannot be empty")
        if not self.url:
            raise ValueError("URL cannot be empty")
        if self.kind == SourceKind.DATED_PAGE and self.date_format is None:
            raise ValueError(f"Source {self.id} needs a date format")

    @property
    def identifier_kind(self) -> IdentifierKind:
        if self.kind == SourceKind.SEMVER_CHANGELOG:
            return IdentifierKind.VERSION
        return IdentifierKind.DATE


@dataclass(frozen=True)
class Entry:
    """One discovered version section or dated post.

    For blog posts ``identifier`` holds the post date and the title is the
    persisted marker.
    """

    identifier: str
    title: str
    body: str = ""
    link: Optional[str] = None


@dataclass(frozen=True)
class Snapshot:
    """Archived copy of a page."""

    timestamp: str
    url: str


@dataclass(frozen=True)
class FetchedContent:
    """Raw content plus the snapshot it came from, if any."""

    text: str
    snapshot: Optional[Snapshot] = None


@dataclass(frozen=True)
class Failure:
    """Fetch or extraction failure."""

    message: str
    transient: bool = False


class CheckStatus(str, Enum):
    """Outcome of one source check."""

    UNCHANGED = "unchanged"
    CHANGED = "changed"
    FAILED = "failed"


@dataclass
class CheckResult:
    """Result of checking a single source."""

    source: Source
    status: CheckStatus
    version_label: Optional[str] = None
    summary: Optional[str] = None
    watermark: Optional[str] = None
    error: Optional[str] = None
    transient: bool = False

    @property
    def has_changed(self) -> bool:
        return self.status == CheckStatus.CHANGED

    @property
    def failed(self) -> bool:
        return self.status == CheckStatus.FAILED

    @classmethod
    def unchanged(cls, source: Source) -> "CheckResult":
        return cls(source=source, status=CheckStatus.UNCHANGED)

    @classmethod
    def from_failure(cls, source: Source, failure: Failure) -> "CheckResult":
        return cls(
            source=source,
            status=CheckStatus.FAILED,
            error=failure.message,
            transient=failure.transient,
        )


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of a notification attempt."""

    success: bool
    error: Optional[str] = None
