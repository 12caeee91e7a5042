"""Repository management commands."""

from pathlib import Path

import typer

from gittaskr_cli.config import get_config_manager
from gittaskr_cli.services.storage_context import open_storage_context
from gittaskr_cli.ui.prompts import ask_text, confirm
from gittaskr_cli.utils.filesystem import validate_directory
from gittaskr_cli.utils.ui.formatters import format_output, format_success, format_warning
from gittaskr_cli.utils.validators import validate_name, validate_remote_url

from .decorators import command_wrapper

app = typer.Typer(help="Repository management commands")


@app.command("add")
@command_wrapper
async def add_repository(
    name: str | None = typer.Option(None, "--name", "-n", help="Repository name"),
    path: str | None = typer.Option(None, "--path", "-p", help="Local directory"),
    remote_url: str | None = typer.Option(
        None, "--remote-url", "-r", help="Remote URL (https or ssh, ending in .git)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Register a local git repository."""
    output_format = get_config_manager().output_format(output)
    interactive = name is None or path is None
    if name is None:
        name = await ask_text("Repository name:", check=validate_name)
    if path is None:
        path = await ask_text("Repository path:", default=str(Path.cwd()), check=validate_directory)
    if remote_url is None and interactive:
        remote_url = await ask_text("Remote URL (optional):", check=validate_remote_url)

    with open_storage_context() as storage:
        repository = await storage.repository_service.create_repository(
            name=name, path=path, remote_url=remote_url
        )

    format_success(f"Repository added: {repository.id}")
    format_output(repository.model_dump(mode="json"), output_format)


@app.command("list")
@command_wrapper
async def list_repositories(
    sort: str = typer.Option(
        "created_at:desc", "--sort", "-s", help="Sort order, e.g. name:asc or created_at:desc"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List repositories with their task counts."""
    output_format = get_config_manager().output_format(output)
    with open_storage_context() as storage:
        repositories = await storage.repository_service.list_repositories(sort=sort)

    result = {"repositories": [r.model_dump(mode="json") for r in repositories]}
    format_output(result, output_format)


@app.command("get")
@command_wrapper
async def get_repository(
    repository_id: int = typer.Argument(..., help="Repository ID"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show one repository."""
    output_format = get_config_manager().output_format(output)
    with open_storage_context() as storage:
        repository = await storage.repository_service.require_repository(repository_id)

    format_output(repository.model_dump(mode="json"), output_format)


@app.command("update")
@command_wrapper
async def update_repository(
    repository_id: int = typer.Argument(..., help="Repository ID"),
    name: str | None = typer.Option(None, "--name", "-n", help="Repository name"),
    path: str | None = typer.Option(None, "--path", "-p", help="Local directory"),
    remote_url: str | None = typer.Option(
        None, "--remote-url", "-r", help="Remote URL; pass an empty string to clear it"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Update a repository.

    Without any option, prompts for every field using the current values as
    defaults.
    """
    output_format = get_config_manager().output_format(output)
    with open_storage_context() as storage:
        service = storage.repository_service
        current = await service.require_repository(repository_id)

        if name is None and path is None and remote_url is None:
            name = await ask_text("Repository name:", default=current.name, check=validate_name)
            path = await ask_text(
                "Repository path:", default=current.path, check=validate_directory
            )
            remote_url = await ask_text(
                "Remote URL (optional):",
                default=current.remote_url or "",
                check=validate_remote_url,
            )

        repository = await service.update_repository(
            repository_id, name=name, path=path, remote_url=remote_url
        )

    format_success(f"Repository updated: {repository_id}")
    format_output(repository.model_dump(mode="json"), output_format)


@app.command("delete")
@command_wrapper
async def delete_repository(
    repository_id: int = typer.Argument(..., help="Repository ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a repository and all of its tasks."""
    with open_storage_context() as storage:
        service = storage.repository_service
        repository = await service.require_repository(repository_id)

        if not yes and not confirm(
            f"Delete repository '{repository.name}' and its {repository.task_count} task(s)?"
        ):
            format_warning("Operation cancelled")
            raise typer.Exit(0)

        removed = await service.delete_repository(repository_id)

    format_success(f"Repository deleted: {repository_id} ({removed} task(s) removed)")
