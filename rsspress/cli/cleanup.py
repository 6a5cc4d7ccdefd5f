"""Retention sweep command."""

import typer
from rich.console import Console

from ..config import Config
from ..errors import StorageError
from ..pipeline import Components

console = Console()


def cleanup_command() -> None:
    """Delete stored newspapers older than the retention period."""
    components = Components(Config())

    try:
        result = components.retention_sweep().run()
    except StorageError as e:
        console.print(f"[red]❌ Cleanup failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        components.close()

    console.print(
        f"✅ Cleanup complete: {result.deleted} newspapers dated before {result.cutoff_date} deleted "
        f"({result.scanned} index entries scanned, {result.batches} batches)"
    )
