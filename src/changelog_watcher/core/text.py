"""Markup to plain text conversion."""

import html
import re
from typing import Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup

BLOCK_TAGS = [
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "li",
    "tr",
    "blockquote",
    "section",
]

_TAG_RE = re.compile(r"<[^>]*>")
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_HORIZONTAL_SPACE_RE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE_RE = re.compile(r" ?\n ?")
_EXTRA_NEWLINES_RE = re.compile(r"\n{3,}")


def _parse(markup: str) -> Optional[BeautifulSoup]:
    try:
        soup = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup:
        return None

    for element in soup.find_all(["script", "style"]):
        element.decompose()

    return soup


def _fallback_text(markup: str) -> str:
    """Treat markup as text when the parser gives up."""
    text = _SCRIPT_STYLE_RE.sub(" ", markup)
    return html.unescape(_TAG_RE.sub(" ", text))


def _tidy(text: str) -> str:
    text = text.replace("\xa0", " ")
    text = _HORIZONTAL_SPACE_RE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE_RE.sub("\n", text)
    text = _EXTRA_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def html_to_text(markup: str) -> str:
    """Convert markup to plain text, keeping paragraph boundaries.

    Block elements become blank-line separated paragraphs, ``<br>`` becomes
    a single line break, and script/style contents are dropped.

    Args:
        markup: HTML or HTML-like text

    Returns:
        Plain text with at most two consecutive line breaks
    """
    soup = _parse(markup)
    if soup is None:
        return _tidy(_fallback_text(markup))

    for br in soup.find_all("br"):
        br.replace_with("\n")

    for block in soup.find_all(BLOCK_TAGS):
        block.insert_before("\n\n")
        block.insert_after("\n\n")

    return _tidy(soup.get_text())


def strip_html(markup: str) -> str:
    """Strip all markup into a single space-joined line."""
    soup = _parse(markup)
    text = _fallback_text(markup) if soup is None else soup.get_text(" ")
    return " ".join(text.replace("\xa0", " ").split())
