"""Configuration management commands."""

import typer

from gittaskr_cli.config import get_config_manager
from gittaskr_cli.models import ValidationError
from gittaskr_cli.utils.ui.console import get_console
from gittaskr_cli.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_error,
    format_output,
    format_success,
    format_warning,
)

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    config_manager = get_config_manager()
    config_dict = config_manager.config.model_dump()
    config_dict["database"]["resolved_path"] = str(config_manager.database_path())
    format_output(config_dict, config_manager.output_format(output))


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager().get(key)
    if value is None:
        format_error(f"Configuration key '{key}' not set")
        raise typer.Exit(1)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    if key == "output.format" and value not in OUTPUT_FORMATS:
        raise ValidationError(f"Output format must be one of: {', '.join(OUTPUT_FORMATS)}")

    try:
        get_config_manager().set(key, value)
    except KeyError as e:
        raise ValidationError(f"Unknown configuration key: {key}") from e
    except ValueError as e:
        raise ValidationError(f"Invalid value for '{key}': {value}") from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_warning("Operation cancelled")
            raise typer.Exit(0)

    try:
        get_config_manager().reset(key)
    except KeyError as e:
        raise ValidationError(f"Unknown configuration key: {key}") from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
