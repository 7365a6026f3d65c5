"""File-backed watermark storage."""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml
from loguru import logger

from changelog_watcher.core.interfaces import WatermarkStore


class FileWatermarkStore(WatermarkStore):
    """Keep each source's watermark in its own YAML file."""

    def __init__(self, storage_dir: Path) -> None:
        self.storage_dir = storage_dir

    def _get_state_path(self, source_id: str) -> Path:
        """Get path for a source's state file."""
        safe_id = re.sub(r"[^\w.-]", "_", source_id)
        return self.storage_dir / f"{safe_id}.yaml"

    def read(self, source_id: str) -> Optional[str]:
        """Read the stored identifier, or None if absent or unreadable."""
        state_path = self._get_state_path(source_id)
        if not state_path.exists():
            return None

        try:
            with open(state_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read state for {source_id}: {e}")
            return None

        identifier = data.get("identifier") if isinstance(data, dict) else None
        if not isinstance(identifier, str):
            logger.warning(f"Ignoring malformed state file {state_path}")
            return None

        return identifier

    def write(self, source_id: str, identifier: str) -> None:
        """Persist identifier, replacing any previous value."""
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        state = {
            "identifier": identifier,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        state_path = self._get_state_path(source_id)
        tmp_path = state_path.with_suffix(".yaml.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(state, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        tmp_path.replace(state_path)

    def list_states(self) -> dict[str, dict]:
        """Load every state file, keyed by file stem."""
        if not self.storage_dir.exists():
            return {}

        states = {}
        for state_path in sorted(self.storage_dir.glob("*.yaml")):
            try:
                with open(state_path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError):
                continue
            if isinstance(data, dict):
                states[state_path.stem] = data

        return states
