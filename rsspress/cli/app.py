"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .cleanup import cleanup_command
from .feeds import feeds_app
from .generate import dates_command, generate_command, history_command
from .init import init_command

app = typer.Typer(
    name="rsspress",
    help="RSS newspaper curation - fetch, score and archive daily newspapers",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("generate")(generate_command)
app.command("history")(history_command)
app.command("dates")(dates_command)
app.command("cleanup")(cleanup_command)
app.add_typer(feeds_app, name="feeds", help="Inspect feeds")


if __name__ == "__main__":
    app()
