"""Newspaper generation commands."""

import asyncio
import json
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..errors import DateValidationError, InsufficientArticles, StorageError
from ..pipeline import Components
from .render import print_articles

console = Console()


def _locale_option(locale: str) -> str:
    if locale not in ("en", "ja"):
        console.print(f"[red]Unknown locale: {locale} (use en or ja)[/red]")
        raise typer.Exit(1)
    return locale


def generate_command(
    feeds: List[str] = typer.Option(..., "--feed", "-f", help="RSS feed URL (repeatable)"),
    theme: str = typer.Option("", "--theme", "-t", help="Newspaper theme used for scoring"),
    locale: str = typer.Option("en", "--locale", "-l", help="Locale (en, ja)"),
    as_json: bool = typer.Option(False, "--json", help="Print articles as JSON"),
) -> None:
    """Generate a newspaper from the latest articles of the given feeds."""
    locale = _locale_option(locale)
    components = Components(Config())

    try:
        newspaper = asyncio.run(components.generator().generate(feeds, theme, locale))
    except InsufficientArticles as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Generation interrupted by user[/yellow]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([a.to_dict() for a in newspaper.articles], ensure_ascii=False, indent=2))
        return

    print_articles(newspaper.articles, f"Newspaper: {theme or 'untitled'}", newspaper.languages)
    if newspaper.used_fallback:
        console.print("[yellow]Importance scores come from the rule-based fallback[/yellow]")


def history_command(
    newspaper_id: str = typer.Argument(..., help="Newspaper ID"),
    date: str = typer.Option(..., "--date", "-d", help="Newspaper date (YYYY-MM-DD)"),
    feeds: Optional[List[str]] = typer.Option(
        None,
        "--feed",
        "-f",
        help="RSS feed URL (repeatable). Default: the newspaper's stored feeds",
    ),
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="Theme. Default: newspaper name"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Locale (en, ja)"),
    as_json: bool = typer.Option(False, "--json", help="Print the stored record as JSON"),
) -> None:
    """Get the newspaper for a past date, generating it on first request."""
    if locale is not None:
        locale = _locale_option(locale)
    components = Components(Config())

    try:
        record = asyncio.run(components.historical().get_or_create(newspaper_id, date, feeds or None, theme, locale))
    except DateValidationError as e:
        console.print(f"[red]❌ {e} ({e.reason})[/red]")
        raise typer.Exit(1)
    except InsufficientArticles as e:
        console.print(f"[red]❌ {e} ({e.reason})[/red]")
        raise typer.Exit(1)
    except StorageError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    finally:
        components.close()

    if as_json:
        typer.echo(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
        return

    print_articles(record.articles, f"{record.name} - {record.newspaper_date}", record.languages)


def dates_command(
    newspaper_id: str = typer.Argument(..., help="Newspaper ID"),
) -> None:
    """List the dates stored for a newspaper."""
    components = Components(Config())

    try:
        dates = components.historical().get_available_dates(newspaper_id)
    except StorageError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    finally:
        components.close()

    if not dates:
        console.print("[yellow]No stored dates.[/yellow]")
        return

    table = Table(title=f"Stored dates for {newspaper_id}")
    table.add_column("Date", style="cyan")
    for date in dates:
        table.add_row(date)
    console.print(table)
