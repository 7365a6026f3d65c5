"""Slack notification adapter."""

import re
from typing import Optional

import httpx

from changelog_watcher.core import NotificationResult, NotificationService


class SlackNotifier(NotificationService):
    """Send change notifications to a Slack workflow webhook."""

    def __init__(self, webhook_url: Optional[str] = None, timeout: float = 30.0) -> None:
        """Initialize Slack notifier.

        Args:
            webhook_url: Slack webhook URL. Sending fails without one.
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    def _convert_markdown_to_mrkdwn(self, text: str) -> str:
        """Convert markdown to Slack mrkdwn format.

        Args:
            text: Markdown text

        Returns:
            Text in Slack mrkdwn format
        """
        # Convert markdown links [text](url) to Slack format <url|text>
        text = re.sub(r'\[([^\]]+)\]\(([^)]+)\)', r'<\2|\1>', text)

        # Convert markdown bold **text** to Slack bold *text*
        text = re.sub(r'\*\*([^*]+)\*\*', r'*\1*', text)

        return text

    async def send(
        self, source_name: str, version_label: str, change_summary: str
    ) -> NotificationResult:
        """Post one change notification.

        The request is attempted once; failures are returned, not raised.

        Args:
            source_name: Display name of the source
            version_label: Version or date range that changed
            change_summary: Summary text (in markdown)
        """
        if not self.webhook_url:
            return NotificationResult(success=False, error="No webhook URL configured")

        payload = {
            "source": source_name,
            "version": version_label,
            "changes": self._convert_markdown_to_mrkdwn(change_summary),
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(self.webhook_url, json=payload)
            except httpx.HTTPError as e:
                return NotificationResult(success=False, error=str(e))

        if response.is_success:
            return NotificationResult(success=True)
        return NotificationResult(success=False, error=f"{response.status_code}: {response.text}")
