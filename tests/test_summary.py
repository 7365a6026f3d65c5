"""Tests for change summaries."""

from changelog_watcher.core import DateFormat, Entry, Source, SourceKind
from changelog_watcher.core.summary import (
    GENERIC_VERSION_LABEL,
    format_summary,
    generic_summary,
    version_label,
)

CHANGELOG_SOURCE = Source(
    id="claude-code",
    name="Claude Code",
    url="https://raw.githubusercontent.com/anthropics/claude-code/main/CHANGELOG.md",
    kind=SourceKind.SEMVER_CHANGELOG,
    display_url="https://github.com/anthropics/claude-code/blob/main/CHANGELOG.md",
)
DATED_SOURCE = Source(
    id="gemini",
    name="Gemini",
    url="https://gemini.google/release-notes/",
    kind=SourceKind.DATED_PAGE,
    display_url="https://gemini.google/release-notes/",
    date_format=DateFormat.DOTTED,
)
BLOG_SOURCE = Source(
    id="claude-blog",
    name="Claude Blog",
    url="https://claude.com/blog",
    kind=SourceKind.DATED_BLOG,
    display_url="https://claude.com/blog",
)


def test_version_label_single_and_range() -> None:
    """Test one entry gives its label and several give a range."""
    newest = Entry("1.2.0", "1.2.0")
    oldest = Entry("1.1.0", "1.1.0")

    assert version_label(CHANGELOG_SOURCE, [newest]) == "1.2.0"
    assert version_label(CHANGELOG_SOURCE, [newest, oldest]) == "1.1.0 → 1.2.0"


def test_version_label_dated_entry_includes_title() -> None:
    """Test dated entries are labelled with title and date."""
    entry = Entry("2025.01.17", "New Feature Title")

    assert version_label(DATED_SOURCE, [entry]) == "New Feature Title (2025.01.17)"
    assert version_label(DATED_SOURCE, [Entry("2025.01.17", "")]) == "2025.01.17"


def test_changelog_summary_is_chronological() -> None:
    """Test versions are listed oldest first with their bodies."""
    novel = [Entry("1.2.0", "1.2.0", "- Added X"), Entry("1.1.0", "1.1.0", "- Added Y")]

    summary = format_summary(CHANGELOG_SOURCE, novel)

    assert summary == "**1.1.0**\n- Added Y\n\n**1.2.0**\n- Added X"


def test_dated_summary_ends_with_release_page_once() -> None:
    """Test dated summaries end with the release page exactly once."""
    novel = [
        Entry("2025.01.20", "Second", "Details two"),
        Entry("2025.01.17", "First", "Details one"),
    ]

    summary = format_summary(DATED_SOURCE, novel)

    assert summary.index("**First**") < summary.index("**Second**")
    assert summary.endswith("Full release notes: https://gemini.google/release-notes/")
    assert summary.count("https://gemini.google/release-notes/") == 1


def test_blog_summary_uses_article_links() -> None:
    """Test blog lines link the article, falling back to the index."""
    novel = [
        Entry("February 10, 2026", "Introducing Claude 4.5", link="https://claude.com/blog/introducing-claude-4-5"),
        Entry("February 3, 2026", "Unlinked post"),
    ]

    summary = format_summary(BLOG_SOURCE, novel)

    assert summary.splitlines() == [
        "• Unlinked post (February 3, 2026): https://claude.com/blog",
        "• Introducing Claude 4.5 (February 10, 2026): https://claude.com/blog/introducing-claude-4-5",
    ]


def test_generic_summary() -> None:
    """Test the fallback summary points at the release page."""
    summary = generic_summary(DATED_SOURCE)

    assert summary.startswith("Gemini release notes have been updated.")
    assert summary.endswith("https://gemini.google/release-notes/")
    assert GENERIC_VERSION_LABEL == "Update detected"


def test_version_label_same_day_posts() -> None:
    """Test a range with equal ends collapses to one value."""
    novel = [Entry("January 5, 2026", "Second"), Entry("January 5, 2026", "First")]

    assert version_label(BLOG_SOURCE, novel) == "January 5, 2026"
