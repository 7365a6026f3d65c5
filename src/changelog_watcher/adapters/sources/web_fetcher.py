"""HTTP content fetcher with Wayback Machine snapshot lookup."""

import asyncio
from typing import Optional

import httpx
from loguru import logger

from changelog_watcher.core import ContentFetcher, Snapshot

DEFAULT_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


class WebFetcher(ContentFetcher):
    """Fetch pages over HTTP, retrying a fixed number of times."""

    def __init__(
        self,
        timeout: float = 30.0,
        retries: int = 2,
        retry_delay: float = 2.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.retries = max(1, retries)
        self.retry_delay = retry_delay
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }
        self.availability_url = "https://archive.org/wayback/available"

    async def _get(self, url: str, params: Optional[dict] = None) -> Optional[httpx.Response]:
        """GET url, returning the first successful response or None."""
        async with httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=True, headers=self.headers
        ) as client:
            for attempt in range(1, self.retries + 1):
                try:
                    response = await client.get(url, params=params)
                    if response.is_success:
                        return response
                    reason = f"HTTP {response.status_code}"
                except httpx.HTTPError as e:
                    reason = f"network error: {e}"

                if attempt < self.retries:
                    logger.warning(f"Retry {attempt}/{self.retries - 1} for {url} after {reason}")
                    await asyncio.sleep(self.retry_delay)
                else:
                    logger.warning(f"Giving up on {url} after {reason}")

        return None

    async def fetch(self, url: str) -> Optional[str]:
        """Fetch page text."""
        response = await self._get(url)
        return response.text if response is not None else None

    async def find_latest_snapshot(self, url: str) -> Optional[Snapshot]:
        """Ask the Wayback availability API for the closest capture of url."""
        response = await self._get(self.availability_url, params={"url": url})
        if response is None:
            return None

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"Invalid response from Wayback Machine for {url}")
            return None

        snapshots = data.get("archived_snapshots") if isinstance(data, dict) else None
        closest = snapshots.get("closest") if isinstance(snapshots, dict) else None
        if not isinstance(closest, dict) or not closest.get("available"):
            return None

        timestamp = str(closest.get("timestamp") or "")
        snapshot_url = closest.get("url")
        if not timestamp or not snapshot_url:
            return None

        logger.info(f"Found Wayback snapshot of {url} from {timestamp}")
        return Snapshot(timestamp=timestamp, url=snapshot_url)
