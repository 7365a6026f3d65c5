"""Source adapters for fetching page content."""

from changelog_watcher.adapters.sources.web_fetcher import WebFetcher

__all__ = ["WebFetcher"]
