"""Pure field validators.

Each validator takes the raw value and returns None when it is valid or a
human-readable reason when it is not. The same functions back both the
interactive prompts and the service layer.
"""

from __future__ import annotations

import re

from gittaskr_cli.models import VALID_PRIORITIES, VALID_STATUSES, ValidationError

# https://host/owner/repo.git
HTTPS_REMOTE_RE = re.compile(r"^https://[\w.-]+(:\d+)?/[\w.-]+/[\w.-]+\.git$")
# git@host:owner/repo.git
SSH_REMOTE_RE = re.compile(r"^git@[\w.-]+:[\w.-]+/[\w.-]+\.git$")


def validate_name(value: str | None) -> str | None:
    if not value:
        return "Repository name cannot be empty"
    return None


def validate_title(value: str | None) -> str | None:
    if not value:
        return "Task title cannot be empty"
    return None


def validate_remote_url(value: str | None) -> str | None:
    """Check the remote URL shape. Empty or missing values are accepted."""
    if not value:
        return None
    if HTTPS_REMOTE_RE.match(value) or SSH_REMOTE_RE.match(value):
        return None
    return (
        f"Invalid remote URL '{value}'. Expected https://host/owner/repo.git "
        "or git@host:owner/repo.git"
    )


def validate_status(value: str | None) -> str | None:
    if value not in VALID_STATUSES:
        return f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}"
    return None


def validate_priority(value: str | None) -> str | None:
    if value not in VALID_PRIORITIES:
        return f"Invalid priority. Must be one of: {', '.join(VALID_PRIORITIES)}"
    return None


def ensure_valid(reason: str | None) -> None:
    """Raise ValidationError if a validator returned a reason."""
    if reason is not None:
        raise ValidationError(reason)
