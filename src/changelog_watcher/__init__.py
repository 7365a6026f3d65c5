"""Watch changelogs, release notes and blogs for new entries."""

__version__ = "0.1.0"
