"""Error taxonomy for gittaskr."""

from __future__ import annotations


class GittaskrError(Exception):
    """Base exception for all gittaskr errors."""


class ValidationError(GittaskrError):
    """Raised when input is malformed or outside its enumerated domain."""


class ConstraintViolation(GittaskrError):
    """Raised when a write would break a uniqueness or foreign-key rule."""


class NotFoundError(GittaskrError):
    """Raised when a referenced id does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity.capitalize()} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(GittaskrError):
    """Raised on I/O or connection failures in the storage layer."""


class SchemaError(StorageError):
    """Raised when the schema cannot be created. Fatal at startup."""
