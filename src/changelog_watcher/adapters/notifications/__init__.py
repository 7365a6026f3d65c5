"""Notification adapters."""

from changelog_watcher.adapters.notifications.slack_notifier import SlackNotifier

__all__ = ["SlackNotifier"]
