"""Exception hierarchy for the reconciliation engine."""

from typing import Any


class SyncError(Exception):
    """Base exception for sync failures.

    ``phase`` records the state the run was in when the error occurred,
    so callers can tell a validation failure from a fetch failure.
    """

    def __init__(self, message: str, phase: Any = None):
        super().__init__(message)
        self.phase = phase


class ConfigError(SyncError):
    """A required credential or identifier is missing."""

    pass


class SchemaViolationError(SyncError):
    """The Notion database, or one of its rows, has an unexpected shape."""

    def __init__(self, message: str, property_name: str | None = None, phase: Any = None):
        super().__init__(message, phase=phase)
        self.property_name = property_name


class FetchError(SyncError):
    """A paginated request against GitHub or Notion failed."""

    pass


class MutationError(SyncError):
    """A single create or archive call failed. Never fatal to the run."""

    def __init__(self, message: str, action: str, label: str):
        super().__init__(message)
        self.action = action
        self.label = label
