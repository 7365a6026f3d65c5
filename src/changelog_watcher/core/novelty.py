"""Selection of entries that are new relative to a stored watermark."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from changelog_watcher.core.entities import Entry, IdentifierKind
from changelog_watcher.core.identifiers import (
    compare_identifiers,
    compare_versions,
    identifiers_comparable,
    is_newer,
)


class NoveltyBranch(str, Enum):
    """Which rule decided the novel subset."""

    FIRST_RUN = "first_run"
    BY_ORDER = "by_order"
    MATCHED_BY_IDENTITY = "matched_by_identity"
    MATCHED_BY_POSITION = "matched_by_position"
    NOT_FOUND = "not_found"


@dataclass
class NoveltyDecision:
    """Novel entries, newest first, and the branch that produced them."""

    branch: NoveltyBranch
    entries: list[Entry] = field(default_factory=list)


def _identifier(entry: Entry) -> str:
    return entry.identifier


def _title(entry: Entry) -> str:
    return entry.title


def decide_by_version(entries: list[Entry], stored: Optional[str]) -> NoveltyDecision:
    """Keep every entry whose version is newer than the stored one."""
    if stored is None:
        return NoveltyDecision(NoveltyBranch.FIRST_RUN, entries[:1])

    newer = [entry for entry in entries if compare_versions(entry.identifier, stored) > 0]
    return NoveltyDecision(NoveltyBranch.BY_ORDER, newer)


def _posted_after(entry: Entry, baseline: str) -> bool:
    # Entries whose date cannot be ordered against the baseline are kept
    if not identifiers_comparable(entry.identifier, baseline, IdentifierKind.DATE):
        return True
    return is_newer(entry.identifier, baseline, IdentifierKind.DATE)


def decide_by_position(
    entries: list[Entry],
    stored: Optional[str],
    key: Callable[[Entry], str] = _identifier,
    date_guard: bool = False,
) -> NoveltyDecision:
    """Locate the stored marker in the list and keep what sits above it.

    Args:
        entries: Entries newest first
        stored: Stored marker (date or title), None on first run
        key: Extracts the marker from an entry
        date_guard: Drop candidates not dated after the matched entry

    Returns:
        Decision; an unknown marker yields only the newest entry
    """
    if stored is None:
        return NoveltyDecision(NoveltyBranch.FIRST_RUN, entries[:1])

    position = next((i for i, entry in enumerate(entries) if key(entry) == stored), None)
    if position is None:
        return NoveltyDecision(NoveltyBranch.NOT_FOUND, entries[:1])
    if position == 0:
        return NoveltyDecision(NoveltyBranch.MATCHED_BY_IDENTITY)

    candidates = entries[:position]
    if date_guard:
        baseline = entries[position].identifier
        candidates = [entry for entry in candidates if _posted_after(entry, baseline)]

    return NoveltyDecision(NoveltyBranch.MATCHED_BY_POSITION, candidates)


def versions_since(entries: list[Entry], stored: Optional[str]) -> list[Entry]:
    """Version entries newer than stored, newest first."""
    return decide_by_version(entries, stored).entries


def entries_since(entries: list[Entry], stored: Optional[str]) -> list[Entry]:
    """Dated-page entries above the stored date and dated after it, newest first."""
    return decide_by_position(entries, stored, date_guard=True).entries


def posts_since(posts: list[Entry], stored_title: Optional[str]) -> list[Entry]:
    """Blog posts above the stored title and dated after it, newest first."""
    return decide_by_position(posts, stored_title, key=_title, date_guard=True).entries


def newest_entry(entries: list[Entry], kind: IdentifierKind) -> Entry:
    """Entry with the greatest identifier; the earliest in page order on ties.

    Pinned or featured blocks can put an older entry first on the page.
    """
    newest = entries[0]
    for entry in entries[1:]:
        if compare_identifiers(entry.identifier, newest.identifier, kind) > 0:
            newest = entry
    return newest


def marker_of(entry: Entry, by_title: bool) -> str:
    """Value persisted as the watermark for entry."""
    return _title(entry) if by_title else _identifier(entry)
