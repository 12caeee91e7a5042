"""Main entry point for gittaskr CLI."""

import signal

import typer

from gittaskr_cli import __version__
from gittaskr_cli.commands import config_cmd, repos, tasks
from gittaskr_cli.config import get_config_manager
from gittaskr_cli.utils.logger import enable_console_logging, get_logger
from gittaskr_cli.utils.ui.console import get_console

# Unknown commands get typer's "Did you mean" suggestions
app = typer.Typer(
    name="gittaskr",
    help="Track local git repositories and their tasks",
    no_args_is_help=True,
)

console = get_console()


@app.callback()
def main_callback(
    db: str | None = typer.Option(
        None, "--db", help="Database file (overrides GITTASKR_DB and config)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to stderr"),
) -> None:
    """Track local git repositories and their tasks."""
    if db:
        get_config_manager().db_override = db
    if verbose:
        enable_console_logging()


# Add subcommands
app.add_typer(repos.app, name="repo", help="Repository management commands")
app.add_typer(tasks.app, name="task", help="Task management commands")
app.add_typer(config_cmd.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]gittaskr[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Database: {get_config_manager().database_path()}[/dim]")


def _handle_sigterm(signum, frame):
    # SystemExit unwinds through the open storage context, closing the database
    get_logger().warning("received signal %s, exiting", signum)
    raise SystemExit(128 + signum)


# Main entry point
def main():
    """Main entry point."""
    signal.signal(signal.SIGTERM, _handle_sigterm)
    app()


if __name__ == "__main__":
    main()
