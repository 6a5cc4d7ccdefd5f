"""Rich rendering of newspapers."""

from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..models import Article

console = Console()


def print_articles(articles: List[Article], title: str, languages: Optional[List[str]] = None) -> None:
    """Print articles as a table, in newspaper order."""
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Feed", style="magenta")
    table.add_column("Published", style="yellow")
    table.add_column("Image", justify="center")

    for index, article in enumerate(articles, 1):
        table.add_row(
            str(index),
            str(article.importance) if article.importance is not None else "-",
            article.title,
            article.feed_title or article.feed_source,
            article.pub_date.strftime("%Y-%m-%d %H:%M"),
            "✓" if article.has_image else "",
        )

    console.print(table)
    if languages:
        console.print(f"Languages: [bold]{', '.join(languages)}[/bold]")
