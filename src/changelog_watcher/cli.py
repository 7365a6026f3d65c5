"""CLI entry point for changelog watcher."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv

from changelog_watcher.adapters.notifications import SlackNotifier
from changelog_watcher.adapters.sources import WebFetcher
from changelog_watcher.config import ConfigError, Settings, get_settings, webhook_env_var
from changelog_watcher.core import CheckResult, FileWatermarkStore
from changelog_watcher.log import setup_logging
from changelog_watcher.use_cases import ChangelogWatcher, NotificationDispatcher


def main(
    target: str = typer.Argument("all", help="Source id to check, or 'all'"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Check without saving state or notifying"),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
    show_state: bool = typer.Option(False, "--show-state", help="Print stored watermarks and exit"),
) -> None:
    """Check changelogs for new entries and notify Slack."""
    load_dotenv()
    setup_logging(debug)

    try:
        settings = get_settings(config)
    except ConfigError as e:
        typer.echo(f"❌ Invalid config: {e}", err=True)
        raise typer.Exit(code=2)

    if show_state:
        print_state(settings)
        return

    if target == "all":
        sources = settings.sources
    else:
        source = settings.get_source(target)
        if source is None:
            valid = ", ".join(["all"] + [s.id for s in settings.sources])
            typer.echo(f"❌ Invalid target: {target} (expected one of: {valid})", err=True)
            raise typer.Exit(code=2)
        sources = [source]

    errors = asyncio.run(async_run(settings, sources, dry_run))
    if errors > 0:
        raise typer.Exit(code=1)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def print_state(settings: Settings) -> None:
    """Print stored watermarks per source."""
    states = FileWatermarkStore(settings.data_dir).list_states()
    print(f"\n💾 State in {settings.data_dir}:")
    for source in settings.sources:
        state = states.get(source.id)
        if state:
            print(f"  • {source.name}: {state.get('identifier')} (updated {state.get('updated_at', '?')})")
        else:
            print(f"  • {source.name}: -")


async def async_run(settings: Settings, sources: list, dry_run: bool) -> int:
    """Check sources, send notifications, and return the error count."""
    print("=" * 50)
    print("  📡 Changelog Watcher")
    print("=" * 50)
    if dry_run:
        print("⚠️  DRY RUN - state is not saved and no notifications are sent")

    print("\n🔑 Webhooks:")
    for source in sources:
        mark = "✓" if source.id in settings.webhooks else "✗"
        print(f"  {mark} {webhook_env_var(source.id)}")

    fetcher = WebFetcher(
        timeout=settings.http.timeout,
        retries=settings.http.retries,
        retry_delay=settings.http.retry_delay,
        user_agent=settings.http.user_agent,
    )
    watcher = ChangelogWatcher(fetcher, FileWatermarkStore(settings.data_dir), dry_run=dry_run)
    dispatcher = NotificationDispatcher({
        source_id: SlackNotifier(url, timeout=settings.http.timeout)
        for source_id, url in settings.webhooks.items()
    })

    results = await watcher.check_sources(sources)

    changed = 0
    errors = 0
    for result in results:
        print(f"\n🔍 {result.source.name}")
        if result.failed:
            print_failure(result)
            if not result.transient:
                errors += 1
            continue

        if not result.has_changed:
            print("  └─ No changes detected")
            continue

        changed += 1
        print(f"  └─ ✓ Change detected: {result.version_label}")

        if dry_run:
            print("  └─ [DRY RUN] Would send notification")
            continue

        notification = await dispatcher.dispatch(result)
        if notification.success:
            print("  └─ ✓ Notification sent to Slack")
        else:
            print(f"  └─ ❌ Failed to notify: {notification.error}")
            errors += 1

    print("\n" + "=" * 50)
    print(f"Done. Checked: {len(results)}, Changed: {changed}, Errors: {errors}")
    return errors


def print_failure(result: CheckResult) -> None:
    if result.transient:
        print(f"  └─ ⚠️  Skipped (transient): {result.error}")
    else:
        print(f"  └─ ❌ Error: {result.error}")


if __name__ == "__main__":
    app()
