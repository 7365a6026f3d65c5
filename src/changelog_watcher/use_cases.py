"""Business logic use cases."""

import asyncio
from typing import Optional, Union

from loguru import logger

from changelog_watcher.core import (
    CheckResult,
    CheckStatus,
    ContentFetcher,
    Entry,
    Failure,
    FetchedContent,
    NotificationResult,
    NotificationService,
    Source,
    SourceKind,
    WatermarkStore,
)
from changelog_watcher.core.extractors import extract_entries
from changelog_watcher.core.identifiers import identifiers_comparable, is_newer
from changelog_watcher.core.novelty import (
    NoveltyBranch,
    NoveltyDecision,
    decide_by_position,
    decide_by_version,
    marker_of,
    newest_entry,
)
from changelog_watcher.core.summary import (
    GENERIC_VERSION_LABEL,
    format_summary,
    generic_summary,
    version_label,
)


def decide_novelty(source: Source, entries: list[Entry], stored: Optional[str]) -> NoveltyDecision:
    """Apply the novelty rule for the source kind."""
    if source.kind == SourceKind.SEMVER_CHANGELOG:
        return decide_by_version(entries, stored)
    if source.kind == SourceKind.DATED_BLOG:
        return decide_by_position(entries, stored, key=lambda entry: entry.title, date_guard=True)
    return decide_by_position(entries, stored, date_guard=True)


class ChangelogWatcher:
    """Check sources for content published since the stored watermark."""

    def __init__(
        self,
        fetcher: ContentFetcher,
        store: WatermarkStore,
        dry_run: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.dry_run = dry_run

    async def check_sources(self, sources: list[Source]) -> list[CheckResult]:
        """Check several sources concurrently; results keep input order."""
        return list(await asyncio.gather(*(self.check_source(source) for source in sources)))

    async def check_source(self, source: Source) -> CheckResult:
        """Check one source. Never raises."""
        try:
            return await self._check(source)
        except Exception as e:
            logger.exception(f"Unexpected error while checking {source.name}")
            return CheckResult.from_failure(source, Failure(str(e)))

    async def _obtain_content(self, source: Source) -> Union[FetchedContent, Failure]:
        """Fetch content directly or from the latest archived snapshot."""
        if not source.archived:
            text = await self.fetcher.fetch(source.url)
            if text is None:
                return Failure(f"Failed to fetch {source.name}")
            return FetchedContent(text)

        snapshot = await self.fetcher.find_latest_snapshot(source.url)
        if snapshot is None:
            return Failure("No archived snapshot available", transient=True)

        text = await self.fetcher.fetch(snapshot.url)
        if text is None:
            return Failure("Failed to fetch archived content", transient=True)
        return FetchedContent(text, snapshot)

    async def _check(self, source: Source) -> CheckResult:
        stored = self.store.read(source.id)
        logger.debug(f"{source.id}: stored watermark {stored!r}")

        content = await self._obtain_content(source)
        if isinstance(content, Failure):
            logger.warning(f"{source.id}: {content.message}")
            return CheckResult.from_failure(source, content)

        entries = extract_entries(source, content.text)
        logger.debug(f"{source.id}: extracted {len(entries)} entries")

        if not entries:
            if content.snapshot is None:
                return CheckResult.from_failure(source, Failure(f"No entries found in {source.name}"))
            logger.warning(f"{source.id}: no entries in snapshot, using its timestamp")
            return self._conclude(
                source,
                stored,
                candidate=content.snapshot.timestamp,
                label=GENERIC_VERSION_LABEL,
                summary=generic_summary(source),
                guarded=True,
            )

        by_title = source.kind == SourceKind.DATED_BLOG
        decision = decide_novelty(source, entries, stored)
        novel = decision.entries
        newest = newest_entry(novel, source.identifier_kind) if novel else entries[0]
        candidate = marker_of(newest, by_title)
        logger.debug(f"{source.id}: {decision.branch.value}, {len(novel)} novel")

        if candidate == stored:
            return CheckResult.unchanged(source)

        if not novel:
            logger.info(f"{source.id}: nothing on the page is newer than {stored!r}")
            return CheckResult.unchanged(source)

        # A positional match already dropped everything not after the stored entry
        return self._conclude(
            source,
            stored,
            candidate=candidate,
            label=version_label(source, novel),
            summary=format_summary(source, novel),
            guarded=not by_title and decision.branch != NoveltyBranch.MATCHED_BY_POSITION,
        )

    def _conclude(
        self,
        source: Source,
        stored: Optional[str],
        candidate: str,
        label: str,
        summary: str,
        guarded: bool,
    ) -> CheckResult:
        """Apply the regression guard, then persist and report a change."""
        if candidate == stored:
            return CheckResult.unchanged(source)

        kind = source.identifier_kind
        if (
            guarded
            and stored is not None
            and identifiers_comparable(candidate, stored, kind)
            and not is_newer(candidate, stored, kind)
        ):
            logger.warning(
                f"{source.id}: extracted {candidate!r} is not newer than stored {stored!r}, ignoring"
            )
            return CheckResult.unchanged(source)

        if self.dry_run:
            logger.info(f"{source.id}: dry run, watermark stays at {stored!r}")
        else:
            self.store.write(source.id, candidate)

        return CheckResult(
            source=source,
            status=CheckStatus.CHANGED,
            version_label=label,
            summary=summary,
            watermark=candidate,
        )


class NotificationDispatcher:
    """Route change results to the notifier configured for their source."""

    def __init__(self, notifiers: dict[str, NotificationService]) -> None:
        self.notifiers = notifiers

    async def dispatch(self, result: CheckResult) -> NotificationResult:
        """Send the notification for a changed result."""
        notifier = self.notifiers.get(result.source.id)
        if notifier is None:
            return NotificationResult(success=False, error="No webhook URL configured")

        return await notifier.send(
            result.source.name,
            result.version_label or GENERIC_VERSION_LABEL,
            result.summary or f"Check: {result.source.display_url}",
        )
