"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

import yaml

from changelog_watcher.core import DateFormat, Source, SourceKind


class ConfigError(ValueError):
    """Raised for invalid configuration."""


DEFAULT_SOURCES = [
    Source(
        id="claude-code",
        name="Claude Code",
        url="https://raw.githubusercontent.com/anthropics/claude-code/main/CHANGELOG.md",
        kind=SourceKind.SEMVER_CHANGELOG,
        display_url="https://github.com/anthropics/claude-code/blob/main/CHANGELOG.md",
    ),
    Source(
        id="claude-blog",
        name="Claude Blog",
        url="https://claude.com/blog",
        kind=SourceKind.DATED_BLOG,
        display_url="https://claude.com/blog",
        archived=True,
        link_pattern=r"claude\.com/blog/[\w-]+",
    ),
    Source(
        id="gemini",
        name="Gemini",
        url="https://gemini.google/release-notes/",
        kind=SourceKind.DATED_PAGE,
        display_url="https://gemini.google/release-notes/",
        date_format=DateFormat.DOTTED,
        archived=True,
    ),
    Source(
        id="chatgpt",
        name="ChatGPT",
        url="https://help.openai.com/en/articles/6825453-chatgpt-release-notes",
        kind=SourceKind.DATED_PAGE,
        display_url="https://help.openai.com/en/articles/6825453-chatgpt-release-notes",
        date_format=DateFormat.MONTH_DAY_YEAR,
        archived=True,
    ),
]


@dataclass
class HttpConfig:
    """HTTP settings."""
    timeout: float = 30.0
    retries: int = 2
    retry_delay: float = 2.0
    user_agent: str = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


@dataclass
class PathsConfig:
    """Path settings."""
    data_dir: Path = Path(".data")


@dataclass
class Settings:
    """Application settings."""

    http: HttpConfig = field(default_factory=HttpConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    sources: list[Source] = field(default_factory=lambda: list(DEFAULT_SOURCES))

    # Webhook URLs by source id (from environment only)
    webhooks: dict[str, str] = field(default_factory=dict)

    @property
    def data_dir(self) -> Path:
        return self.paths.data_dir

    def get_source(self, source_id: str) -> Optional[Source]:
        return next((s for s in self.sources if s.id == source_id), None)


def webhook_env_var(source_id: str) -> str:
    """Environment variable holding the webhook for a source."""
    return "SLACK_WEBHOOK_" + source_id.upper().replace("-", "_")


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{config_path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")
    return data


def _section(config: dict, name: str) -> dict:
    """Return an optional mapping section; an empty section counts as absent."""
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def parse_source(data: dict) -> Source:
    """Build a source descriptor from a config mapping."""
    if not isinstance(data, dict):
        raise ConfigError(f"Source entry must be a mapping, got {data!r}")
    try:
        kind = SourceKind(data["kind"])
        date_format = DateFormat(data["date_format"]) if data.get("date_format") else None
        return Source(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            url=str(data["url"]),
            kind=kind,
            display_url=str(data.get("display_url", data["url"])),
            date_format=date_format,
            archived=bool(data.get("archived", False)),
            link_pattern=data.get("link_pattern"),
        )
    except KeyError as e:
        raise ConfigError(f"Source is missing required field {e}") from e
    except ValueError as e:
        raise ConfigError(f"Invalid source {data.get('id', '?')}: {e}") from e


def get_settings(
    config_path: Path = Path("config.yaml"),
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)
    environ = os.environ if environ is None else environ

    settings = Settings()

    for key, value in _section(config, "http").items():
        setattr(settings.http, key, value)

    for key, value in _section(config, "paths").items():
        setattr(settings.paths, key, Path(value))

    if config.get("sources") is not None:
        if not isinstance(config["sources"], list):
            raise ConfigError("'sources' must be a list")
        settings.sources = [parse_source(item) for item in config["sources"]]

    ids = [source.id for source in settings.sources]
    duplicates = sorted({source_id for source_id in ids if ids.count(source_id) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate source ids: {', '.join(duplicates)}")

    for source in settings.sources:
        webhook = environ.get(webhook_env_var(source.id))
        if webhook:
            settings.webhooks[source.id] = webhook

    return settings
