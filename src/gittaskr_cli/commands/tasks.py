"""Task management commands."""

import typer

from gittaskr_cli.config import get_config_manager
from gittaskr_cli.models import DEFAULT_PRIORITY, DEFAULT_STATUS, VALID_PRIORITIES, VALID_STATUSES
from gittaskr_cli.services.storage_context import open_storage_context
from gittaskr_cli.ui.prompts import ask_choice, ask_text, confirm
from gittaskr_cli.utils.ui.formatters import format_output, format_success, format_warning
from gittaskr_cli.utils.validators import validate_title

from .decorators import command_wrapper

app = typer.Typer(help="Task management commands")


@app.command("add")
@command_wrapper
async def add_task(
    repository_id: int = typer.Argument(..., help="Repository ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="Task title"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="low, medium or high"),
    status: str | None = typer.Option(
        None, "--status", "-s", help="pending, in-progress or completed"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Add a task to a repository."""
    output_format = get_config_manager().output_format(output)
    with open_storage_context() as storage:
        # Fail before prompting when the repository is unknown
        await storage.repository_service.require_repository(repository_id)

        if title is None:
            title = await ask_text("Task title:", check=validate_title)
            if description is None:
                description = await ask_text("Description (optional):")
            if priority is None:
                priority = await ask_choice("Priority", VALID_PRIORITIES, default=DEFAULT_PRIORITY)
            if status is None:
                status = await ask_choice("Status", VALID_STATUSES, default=DEFAULT_STATUS)

        task = await storage.task_service.create_task(
            repository_id,
            title,
            description=description,
            priority=priority or DEFAULT_PRIORITY,
            status=status or DEFAULT_STATUS,
        )

    format_success(f"Task added: {task.id}")
    format_output(task.model_dump(mode="json"), output_format)


@app.command("list")
@command_wrapper
async def list_tasks(
    repository_id: int = typer.Argument(..., help="Repository ID"),
    status: str | None = typer.Option(None, "--status", "-s", help="Filter by status"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List the tasks of a repository, newest first."""
    output_format = get_config_manager().output_format(output)
    with open_storage_context() as storage:
        repository = await storage.repository_service.require_repository(repository_id)
        tasks = await storage.task_service.list_tasks(repository_id, status=status)

    result = {
        "repository_name": repository.name,
        "tasks": [t.model_dump(mode="json") for t in tasks],
    }
    format_output(result, output_format)


@app.command("get")
@command_wrapper
async def get_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show one task."""
    output_format = get_config_manager().output_format(output)
    with open_storage_context() as storage:
        task = await storage.task_service.require_task(task_id)

    format_output(task.model_dump(mode="json"), output_format)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="Task title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Description; pass an empty string to clear it"
    ),
    priority: str | None = typer.Option(None, "--priority", "-p", help="low, medium or high"),
    status: str | None = typer.Option(
        None, "--status", "-s", help="pending, in-progress or completed"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Update a task.

    Without any option, prompts for every field using the current values as
    defaults.
    """
    output_format = get_config_manager().output_format(output)
    with open_storage_context() as storage:
        service = storage.task_service
        current = await service.require_task(task_id)

        if title is None and description is None and priority is None and status is None:
            title = await ask_text("Task title:", default=current.title, check=validate_title)
            description = await ask_text(
                "Description (optional):", default=current.description or ""
            )
            priority = await ask_choice("Priority", VALID_PRIORITIES, default=current.priority)
            status = await ask_choice("Status", VALID_STATUSES, default=current.status)

        task = await service.update_task(
            task_id,
            title=title,
            description=description,
            priority=priority,
            status=status,
        )

    format_success(f"Task updated: {task_id}")
    format_output(task.model_dump(mode="json"), output_format)


@app.command("status")
@command_wrapper
async def update_task_status(
    task_id: int = typer.Argument(..., help="Task ID"),
    status: str = typer.Argument(..., help="pending, in-progress or completed"),
) -> None:
    """Change the status of a task."""
    with open_storage_context() as storage:
        task = await storage.task_service.update_task_status(task_id, status)

    format_success(f"Task {task.id} is now {task.status}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    with open_storage_context() as storage:
        service = storage.task_service
        task = await service.require_task(task_id)

        if not yes and not confirm(f"Delete task '{task.title}'?"):
            format_warning("Operation cancelled")
            raise typer.Exit(0)

        await service.delete_task(task_id)

    format_success(f"Task deleted: {task_id}")
