"""Errors surfaced by the application layer."""

from __future__ import annotations


class BatchValidationError(ValueError):
    """Raised for an empty or malformed candidate batch, before any side effect."""


class RecordNotFoundError(LookupError):
    """Raised when a record id is unknown or belongs to another owner."""

    def __init__(self, record_id: object) -> None:
        super().__init__(f"Record not found: {record_id}")
        self.record_id = record_id


class PersistenceError(RuntimeError):
    """Raised when the record store rejects a write; the unit of work is rolled back."""
