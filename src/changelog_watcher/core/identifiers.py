"""Ordering of version and date identifiers."""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from changelog_watcher.core.entities import IdentifierKind

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

MONTH_DATE_PATTERN = rf"(?:{'|'.join(MONTH_NAMES)})\s+\d{{1,2}},\s+\d{{4}}"
DOTTED_DATE_PATTERN = r"\d{4}\.\d{2}\.\d{2}"

_MONTH_DATE_RE = re.compile(rf"^({'|'.join(MONTH_NAMES)})\s+(\d{{1,2}}),\s+(\d{{4}})$")
_DOTTED_DATE_RE = re.compile(rf"^{DOTTED_DATE_PATTERN}$")
_SNAPSHOT_TIMESTAMP_RE = re.compile(r"^\d{14}$")
_VERSION_RE = re.compile(
    r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)


@dataclass(frozen=True)
class Version:
    """Parsed semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _compare_text(a: str, b: str) -> int:
    return (a > b) - (a < b)


def parse_version(text: str) -> Optional[Version]:
    """Parse a version string, coercing missing minor/patch to zero.

    Only the first whitespace-separated token is considered, so headings
    such as ``1.2.0 (2025-01-17)`` still parse.
    """
    tokens = text.strip().split()
    if not tokens:
        return None

    match = _VERSION_RE.match(tokens[0])
    if not match:
        return None

    major, minor, patch, prerelease = match.groups()
    return Version(
        major=int(major),
        minor=int(minor or 0),
        patch=int(patch or 0),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
    )


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    # A release outranks any pre-release of the same triple
    if not a or not b:
        return _sign(len(b) - len(a))

    for left, right in zip(a, b):
        if left == right:
            continue
        if left.isdigit() and right.isdigit():
            return _sign(int(left) - int(right))
        # Numeric identifiers have lower precedence than alphanumeric ones
        if left.isdigit():
            return -1
        if right.isdigit():
            return 1
        return _compare_text(left, right)

    return _sign(len(a) - len(b))


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings by semantic-version precedence.

    Returns:
        1 if a > b, -1 if a < b, 0 if equal. Falls back to plain string
        comparison when either side does not parse.
    """
    left = parse_version(a)
    right = parse_version(b)
    if left is None or right is None:
        return _compare_text(a, b)

    left_triple = (left.major, left.minor, left.patch)
    right_triple = (right.major, right.minor, right.patch)
    if left_triple != right_triple:
        return 1 if left_triple > right_triple else -1

    return _compare_prerelease(left.prerelease, right.prerelease)


def parse_month_date(text: str) -> Optional[date]:
    """Parse a literal ``Month D, YYYY`` date."""
    match = _MONTH_DATE_RE.match(text.strip())
    if not match:
        return None

    month_name, day, year = match.groups()
    try:
        return date(int(year), MONTH_NAMES.index(month_name) + 1, int(day))
    except ValueError:
        return None


def compare_dates(a: str, b: str) -> int:
    """Compare two date identifiers chronologically.

    ``Month D, YYYY`` pairs compare by calendar date. Anything else is
    compared byte-wise, which is only valid for zero-padded ``YYYY.MM.DD``.
    """
    left = parse_month_date(a)
    right = parse_month_date(b)
    if left is None or right is None:
        return _compare_text(a, b)
    return _sign((left - right).days)


def compare_identifiers(a: str, b: str, kind: IdentifierKind) -> int:
    """Compare identifiers using the ordering rule for kind."""
    if kind == IdentifierKind.VERSION:
        return compare_versions(a, b)
    return compare_dates(a, b)


def is_newer(candidate: str, baseline: str, kind: IdentifierKind) -> bool:
    """Check whether candidate is strictly newer than baseline."""
    return compare_identifiers(candidate, baseline, kind) > 0


def _date_form(text: str) -> Optional[str]:
    text = text.strip()
    if parse_month_date(text) is not None:
        return "month"
    if _DOTTED_DATE_RE.match(text):
        return "dotted"
    if _SNAPSHOT_TIMESTAMP_RE.match(text):
        return "timestamp"
    return None


def identifiers_comparable(a: str, b: str, kind: IdentifierKind) -> bool:
    """Check whether a and b share a form whose ordering is meaningful.

    A snapshot timestamp stored after a fallback run cannot be ordered
    against a date extracted later, for example.
    """
    if kind == IdentifierKind.VERSION:
        return parse_version(a) is not None and parse_version(b) is not None
    form = _date_form(a)
    return form is not None and form == _date_form(b)
