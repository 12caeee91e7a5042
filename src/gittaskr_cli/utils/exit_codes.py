"""
Exit codes for gittaskr.

Each error kind maps to its own code so scripts can tell them apart.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Uniqueness or referential-integrity conflict
ERROR_CONSTRAINT = 3

# Resource not found
ERROR_NOT_FOUND = 5

# Database could not be opened, read or written
ERROR_STORAGE = 6

# Interrupted by the user (128 + SIGINT)
ERROR_INTERRUPTED = 130


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_CONSTRAINT: "ERROR_CONSTRAINT",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_STORAGE: "ERROR_STORAGE",
        ERROR_INTERRUPTED: "ERROR_INTERRUPTED",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_CONSTRAINT: "Conflicts with existing data",
        ERROR_NOT_FOUND: "Resource not found",
        ERROR_STORAGE: "Database error - check the database path and permissions",
        ERROR_INTERRUPTED: "Interrupted",
    }
    return descriptions.get(code, "Unknown error")
