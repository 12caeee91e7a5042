"""Filesystem checks for repository paths."""

from __future__ import annotations

from pathlib import Path

from gittaskr_cli.models import ValidationError


def _absolute(value: str) -> Path:
    return Path(value).expanduser().resolve()


def validate_directory(value: str | None) -> str | None:
    """Return None if ``value`` names an existing directory, else a reason."""
    if not value:
        return "Repository path cannot be empty"
    try:
        # RuntimeError: unknown ~user; ValueError: embedded NUL byte
        is_dir = _absolute(value).is_dir()
    except (RuntimeError, ValueError, OSError) as e:
        return f"Invalid repository path {value!r}: {e}"
    if not is_dir:
        return f"Path is not an existing directory: {value}"
    return None


def resolve_directory(value: str) -> Path:
    """Resolve a user-supplied path to an absolute existing directory.

    Raises:
        ValidationError: If the path is empty, malformed or not an existing directory
    """
    reason = validate_directory(value)
    if reason is not None:
        raise ValidationError(reason)
    return _absolute(value)
