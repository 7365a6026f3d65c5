"""Tests for the file watermark store."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from changelog_watcher.core import FileWatermarkStore


def test_read_missing_returns_none() -> None:
    """Test a source without state has no watermark."""
    with TemporaryDirectory() as tmpdir:
        store = FileWatermarkStore(Path(tmpdir))

        assert store.read("claude-code") is None


def test_write_then_read() -> None:
    """Test basic persistence across store instances."""
    with TemporaryDirectory() as tmpdir:
        storage_dir = Path(tmpdir) / "nested" / "state"
        store = FileWatermarkStore(storage_dir)

        store.write("claude-code", "1.2.0")

        assert store.read("claude-code") == "1.2.0"
        assert (storage_dir / "claude-code.yaml").exists()

        # Load from new store instance
        assert FileWatermarkStore(storage_dir).read("claude-code") == "1.2.0"


def test_write_replaces_previous_value() -> None:
    """Test only the latest watermark is kept."""
    with TemporaryDirectory() as tmpdir:
        store = FileWatermarkStore(Path(tmpdir))

        store.write("gemini", "2025.01.15")
        store.write("gemini", "2025.01.17")

        assert store.read("gemini") == "2025.01.17"
        assert not list(Path(tmpdir).glob("*.tmp"))


@pytest.mark.parametrize(
    "identifier",
    [
        "2025.01.17",
        "January 17, 2026",
        "20250117120000",
        "Introducing Claude 4.5: \"quoted\" & more",
        "yes",
        "null",
        "0123",
    ],
)
def test_identifiers_round_trip_as_strings(identifier: str) -> None:
    """Test values YAML could misread come back unchanged."""
    with TemporaryDirectory() as tmpdir:
        store = FileWatermarkStore(Path(tmpdir))

        store.write("source", identifier)

        assert store.read("source") == identifier


def test_sources_are_isolated() -> None:
    """Test one source's state does not affect another's."""
    with TemporaryDirectory() as tmpdir:
        store = FileWatermarkStore(Path(tmpdir))

        store.write("gemini", "2025.01.17")

        assert store.read("chatgpt") is None


def test_malformed_state_is_ignored() -> None:
    """Test corrupt or unexpected files read as absent."""
    with TemporaryDirectory() as tmpdir:
        storage_dir = Path(tmpdir)
        store = FileWatermarkStore(storage_dir)

        (storage_dir / "broken.yaml").write_text("identifier: [unclosed", encoding="utf-8")
        (storage_dir / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
        (storage_dir / "number.yaml").write_text("identifier: 42\n", encoding="utf-8")

        assert store.read("broken") is None
        assert store.read("list") is None
        assert store.read("number") is None


def test_list_states() -> None:
    """Test all stored states are listed by source id."""
    with TemporaryDirectory() as tmpdir:
        store = FileWatermarkStore(Path(tmpdir))

        store.write("claude-code", "1.2.0")
        store.write("gemini", "2025.01.17")

        states = store.list_states()

        assert set(states) == {"claude-code", "gemini"}
        assert states["claude-code"]["identifier"] == "1.2.0"
        assert "updated_at" in states["gemini"]


def test_list_states_missing_dir() -> None:
    """Test listing before anything was written."""
    with TemporaryDirectory() as tmpdir:
        assert FileWatermarkStore(Path(tmpdir) / "missing").list_states() == {}
