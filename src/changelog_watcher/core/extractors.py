"""Entry extraction strategies.

Every extractor returns entries in page order, which for the monitored
sources is newest first.
"""

import re
from typing import Optional
from urllib.parse import urljoin

from changelog_watcher.core.entities import DateFormat, Entry, Source, SourceKind
from changelog_watcher.core.identifiers import DOTTED_DATE_PATTERN, MONTH_DATE_PATTERN
from changelog_watcher.core.text import html_to_text, strip_html

_VERSION_HEADING_RE = re.compile(r"^#+\s*\[?(\d+\.\d+\.\d+[^\]]*)\]?")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
# Leftover ":" after a line-leading date, or a short "Feb 3:" style prefix
_MONTH_PREFIX = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t|tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
_COLON_PREFIX_RE = re.compile(rf"^(?:{_MONTH_PREFIX}\.?\s+\d{{1,2}})?\s*:\s*")
_HEADING_RE = re.compile(r"<h([1-6])\b[^>]*>(.*?)</h\1\s*>", re.IGNORECASE | re.DOTALL)
_HREF_RE = re.compile(r"""href\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_OPEN_ANCHOR_RE = re.compile(r"<a\b[^>]*>", re.IGNORECASE)
_CLOSE_ANCHOR_RE = re.compile(r"</a\s*>", re.IGNORECASE)
_ARCHIVE_PREFIX_RE = re.compile(
    r"^(?:https?://web\.archive\.org)?/web/\d+(?:[a-z]{2}_)?/", re.IGNORECASE
)
_MONTH_DATE_RE = re.compile(MONTH_DATE_PATTERN)

DATE_PATTERNS = {
    DateFormat.DOTTED: DOTTED_DATE_PATTERN,
    DateFormat.MONTH_DAY_YEAR: MONTH_DATE_PATTERN,
}


def extract_versions(content: str) -> list[Entry]:
    """Split a markdown changelog into version sections.

    Each version heading opens a section whose body runs until the next
    version heading.
    """
    entries: list[Entry] = []
    version: Optional[str] = None
    body_lines: list[str] = []

    for line in content.splitlines():
        match = _VERSION_HEADING_RE.match(line)
        if match:
            if version is not None:
                entries.append(Entry(version, version, "\n".join(body_lines).strip()))
            version = match.group(1).strip()
            body_lines = []
        elif version is not None:
            body_lines.append(line)

    if version is not None:
        entries.append(Entry(version, version, "\n".join(body_lines).strip()))

    return entries


def _clean_title(paragraph: str) -> str:
    return " ".join(_COLON_PREFIX_RE.sub("", paragraph, count=1).split())


def extract_dated_entries(markup: str, date_format: DateFormat) -> list[Entry]:
    """Extract ``(date, title)`` entries from a date-structured page.

    Dates only count when they start a line of the normalized text, so dates
    mentioned inside a paragraph do not open new sections.
    """
    text = html_to_text(markup)
    anchor_re = re.compile(rf"^({DATE_PATTERNS[date_format]})", re.MULTILINE)
    anchors = list(anchor_re.finditer(text))

    entries: list[Entry] = []
    for index, anchor in enumerate(anchors):
        end = anchors[index + 1].start() if index + 1 < len(anchors) else len(text)
        paragraphs = [
            p.strip() for p in _PARAGRAPH_SPLIT_RE.split(text[anchor.end():end]) if p.strip()
        ]

        title = ""
        while paragraphs and not title:
            title = _clean_title(paragraphs.pop(0))

        entries.append(Entry(anchor.group(1), title, "\n\n".join(paragraphs)))

    return entries


def canonical_url(href: str) -> str:
    """Strip a ``/web/<timestamp>/`` archive prefix from a link."""
    return _ARCHIVE_PREFIX_RE.sub("", href.strip(), count=1)


def _wrapping_anchor(gap: str) -> str:
    """Opening ``<a>`` tag still open at the end of gap, or ""."""
    opens = list(_OPEN_ANCHOR_RE.finditer(gap))
    if not opens or _CLOSE_ANCHOR_RE.search(gap, opens[-1].end()):
        return ""
    return opens[-1].group(0)


def _find_link(fragments: list[str], link_pattern: str, base_url: Optional[str]) -> Optional[str]:
    for fragment in fragments:
        for href in _HREF_RE.findall(fragment):
            url = canonical_url(href)
            if base_url:
                url = urljoin(base_url, url)
            if re.search(link_pattern, url):
                return url
    return None


def dedupe_by_title(entries: list[Entry]) -> list[Entry]:
    """Drop repeated titles, keeping the last occurrence of each.

    A "featured" block above the chronological list repeats titles; the
    later occurrence is the one in chronological position.
    """
    seen: set[str] = set()
    kept: list[Entry] = []

    for entry in reversed(entries):
        if entry.title in seen:
            continue
        seen.add(entry.title)
        kept.append(entry)

    kept.reverse()
    return kept


def extract_blog_posts(
    markup: str,
    link_pattern: Optional[str] = None,
    base_url: Optional[str] = None,
) -> list[Entry]:
    """Extract dated posts from a blog index.

    A heading counts as a post only when a ``Month D, YYYY`` date appears
    between it and the next heading.

    Args:
        markup: Blog index HTML
        link_pattern: Regex an article URL must match to be captured
        base_url: Base for resolving relative article links

    Returns:
        Deduplicated posts in page order
    """
    headings = list(_HEADING_RE.finditer(markup))
    posts: list[Entry] = []

    for index, heading in enumerate(headings):
        start = headings[index - 1].end() if index > 0 else 0
        end = headings[index + 1].start() if index + 1 < len(headings) else len(markup)
        span = markup[heading.end():end]

        date_match = _MONTH_DATE_RE.search(strip_html(span))
        title = strip_html(heading.group(2))
        if not date_match or not title:
            continue

        link = None
        if link_pattern:
            # A card link either wraps the heading or follows it
            fragments = [_wrapping_anchor(markup[start:heading.start()]), heading.group(0), span]
            link = _find_link(fragments, link_pattern, base_url)
        posts.append(Entry(identifier=date_match.group(0), title=title, link=link))

    return dedupe_by_title(posts)


def extract_entries(source: Source, content: str) -> list[Entry]:
    """Run the extractor matching the source kind."""
    if source.kind == SourceKind.SEMVER_CHANGELOG:
        return extract_versions(content)
    if source.kind == SourceKind.DATED_PAGE:
        return extract_dated_entries(content, source.date_format)
    if source.kind == SourceKind.DATED_BLOG:
        return extract_blog_posts(content, source.link_pattern, source.display_url)
    raise ValueError(f"Unknown source kind: {source.kind}")
