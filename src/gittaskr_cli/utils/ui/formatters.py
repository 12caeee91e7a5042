"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from gittaskr_cli.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if isinstance(data, dict) and ("repositories" in data or "tasks" in data):
        items = data.get("repositories") or data.get("tasks") or []
        format_dict_table(items)
    elif isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, datetime):
        return format_timestamp(value)
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]✔[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_COLORS = {
    "high": "red",
    "medium": "yellow",
    "low": "green",
}

STATUS_COLORS = {
    "pending": "yellow",
    "in-progress": "blue",
    "completed": "green",
}


def format_pretty(data: Any) -> None:
    """Format data in pretty format with colors."""
    if isinstance(data, dict) and "repositories" in data:
        format_repositories_pretty(data["repositories"])
    elif isinstance(data, dict) and "tasks" in data:
        format_tasks_pretty(data["tasks"], repository_name=data.get("repository_name"))
    elif isinstance(data, dict) and "title" in data:
        format_task_item(data)
    elif isinstance(data, dict) and "path" in data:
        format_repository_item(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_repositories_pretty(repositories: list[dict]) -> None:
    """Format repositories in pretty format."""
    if not repositories:
        console.print("[yellow]No repositories found[/yellow]")
        return

    for repository in repositories:
        format_repository_item(repository)


def format_repository_item(repository: dict) -> None:
    """Format a single repository."""
    line = Text()
    line.append(f"#{repository['id']} ", style="blue")
    line.append(repository.get("name", ""), style="bold")
    console.print(line)

    console.print(Text.assemble(("Path: ", "dim"), repository.get("path", "")))
    if repository.get("remote_url"):
        console.print(Text.assemble(("Remote URL: ", "dim"), repository["remote_url"]))
    if "task_count" in repository:
        console.print(Text.assemble(("Tasks: ", "dim"), str(repository["task_count"])))
    console.print(
        Text.assemble(("Added: ", "dim"), format_timestamp(repository.get("created_at")))
    )
    console.print()


def format_tasks_pretty(tasks: list[dict], repository_name: str | None = None) -> None:
    """Format tasks of one repository in pretty format."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    name = repository_name or tasks[0].get("repository_name", "")
    console.print(f"\n[blue]Tasks for repository: {name}[/blue]\n")
    for task in tasks:
        format_task_item(task, show_repository=False)


def format_task_item(task: dict, show_repository: bool = True) -> None:
    """Format a single task."""
    line = Text()
    line.append(f"#{task['id']} ", style="blue")
    line.append(task.get("title", ""), style="bold")
    console.print(line)

    priority = task.get("priority", "")
    status = task.get("status", "")
    console.print(
        Text.assemble(("Priority: ", "dim"), (priority, PRIORITY_COLORS.get(priority, "")))
    )
    console.print(
        Text.assemble(("Status: ", "dim"), (status, STATUS_COLORS.get(status, "")))
    )
    if task.get("description"):
        console.print(Text.assemble(("Description: ", "dim"), task["description"]))
    if show_repository and task.get("repository_name"):
        console.print(Text.assemble(("Repository: ", "dim"), task["repository_name"]))
    console.print(
        Text.assemble(("Created: ", "dim"), format_timestamp(task.get("created_at")))
    )
    console.print()


def format_timestamp(value: str | datetime | None) -> str:
    """Render a stored UTC timestamp in local time."""
    if value is None:
        return "-"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")
