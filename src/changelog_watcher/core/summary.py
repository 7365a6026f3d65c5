"""Human-readable change summaries."""

from changelog_watcher.core.entities import Entry, Source, SourceKind

GENERIC_VERSION_LABEL = "Update detected"


def entry_label(source: Source, entry: Entry) -> str:
    """Short display label for one entry."""
    if source.kind == SourceKind.SEMVER_CHANGELOG or not entry.title:
        return entry.identifier
    return f"{entry.title} ({entry.identifier})"


def version_label(source: Source, novel: list[Entry]) -> str:
    """Single label, or an ``oldest → newest`` range for several entries."""
    if len(novel) == 1:
        return entry_label(source, novel[0])

    oldest, newest = novel[-1].identifier, novel[0].identifier
    if oldest == newest:
        return newest
    return f"{oldest} → {newest}"


def format_summary(source: Source, novel: list[Entry]) -> str:
    """Render novel entries oldest first.

    Args:
        source: Source the entries came from
        novel: Novel entries, newest first

    Returns:
        Markdown summary
    """
    lines: list[str] = []

    for entry in reversed(novel):
        lines.extend(_format_entry(source, entry))

    if source.kind == SourceKind.DATED_PAGE:
        lines.append(f"Full release notes: {source.display_url}")

    return "\n".join(lines).strip()


def _format_entry(source: Source, entry: Entry) -> list[str]:
    if source.kind == SourceKind.SEMVER_CHANGELOG:
        lines = [f"**{entry.identifier}**"]
        if entry.body:
            lines.append(entry.body)
        lines.append("")
        return lines

    if source.kind == SourceKind.DATED_BLOG:
        return [f"• {entry_label(source, entry)}: {entry.link or source.display_url}"]

    if entry.title:
        lines = [f"• **{entry.title}** ({entry.identifier})"]
    else:
        lines = [f"• **{entry.identifier}**"]
    if entry.body:
        lines.append(entry.body)
    lines.append("")
    return lines


def generic_summary(source: Source) -> str:
    """Summary used when a page changed but no entries could be read."""
    return (
        f"{source.name} release notes have been updated.\n\n"
        f"Check the latest changes here:\n{source.display_url}"
    )
