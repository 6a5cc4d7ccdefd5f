"""Feed inspection commands."""

import asyncio
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..ingestion import print_feed_summary
from ..pipeline import Components

console = Console()
feeds_app = typer.Typer(help="Inspect feeds")


@feeds_app.command("defaults")
def feeds_defaults(
    locale: str = typer.Option("en", "--locale", "-l", help="Locale (en, ja)"),
) -> None:
    """List the default feeds injected for a locale."""
    config = Config()
    feeds = config.config.default_feeds.get(locale, [])

    if not feeds:
        console.print(f"[yellow]No default feeds for locale {locale}.[/yellow]")
        return

    table = Table(title=f"Default feeds ({locale})")
    table.add_column("Title", style="cyan")
    table.add_column("Language", style="magenta")
    table.add_column("URL", style="blue")

    for feed in feeds:
        table.add_row(feed.title, feed.language, feed.url)

    console.print(table)


@feeds_app.command("check")
def feeds_check(
    urls: List[str] = typer.Argument(..., help="RSS feed URLs"),
    days: int = typer.Option(3, "--days", "-d", help="Lookback window in days", min=1),
) -> None:
    """Fetch feeds once and report what each one returned."""
    fetcher = Components(Config()).fetcher
    results = asyncio.run(fetcher.fetch_all_feeds(urls, days))

    table = Table(title=f"Feeds ({days}-day window)")
    table.add_column("URL", style="blue")
    table.add_column("Title", style="cyan")
    table.add_column("Language", style="magenta")
    table.add_column("Entries", justify="right")
    table.add_column("In window", style="green", justify="right")

    for result in results:
        table.add_row(
            result.source_url,
            result.feed_title or "-",
            result.language or "-",
            str(result.item_count),
            str(len(result.articles)) if result.success else "[red]failed[/red]",
        )

    console.print(table)
    print_feed_summary(results)
