"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, save_config
from ..db import close_connection_pools, init_database, validate_connection

console = Console()


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".config" / "rsspress",
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    backend: str = typer.Option("postgres", "--backend", help="Store backend (postgres, memory)"),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("rsspress", "--db-name", help="Database name"),
    db_user: str = typer.Option("rsspress_user", "--db-user", help="Database user"),
) -> None:
    """Write a default configuration and create the database schema."""
    console.print(Panel.fit("📰 rsspress - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"

    try:
        config = ConfigModel(
            storage={"backend": backend},
            postgres={
                "host": db_host,
                "port": db_port,
                "database": db_name,
                "user": db_user,
                "password_env": "RSSPRESS_DB_PASSWORD",
            },
        )
    except ValueError as e:
        console.print(f"[red]❌ Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if backend == "postgres":
        console.print("\n[bold]Testing database connection...[/bold]")
        db_config = config.postgres.model_dump()

        if not validate_connection(db_config):
            console.print(
                "[red]❌ Database connection failed![/red]\n"
                "Please ensure Postgres is running and credentials are correct.\n"
                "Set the password via environment variable: [bold]export RSSPRESS_DB_PASSWORD=your_password[/bold]"
            )
            raise typer.Exit(1)

        console.print("✅ Database connection successful")

        console.print("\n[bold]Initializing database schema...[/bold]")
        try:
            init_database(db_config)
        except Exception as e:
            console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
            raise typer.Exit(1)
        finally:
            close_connection_pools()
        console.print("✅ Database schema initialized")

    console.print(
        Panel(
            f"[green]✅ rsspress initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n\n"
            f"Next steps:\n"
            f"1. Set database password: [bold]export RSSPRESS_DB_PASSWORD=your_password[/bold]\n"
            f"2. Set LLM API key: [bold]export OPENAI_API_KEY=your_key[/bold]\n"
            f"3. Run: [bold]rsspress generate --feed https://example.com/rss --theme technology[/bold]",
            style="green",
        )
    )
