"""Error types raised by the storage layer."""

from __future__ import annotations

from typing import Iterable


class TreeStoreError(Exception):
    """Base class for storage errors."""


class InvalidName(TreeStoreError, ValueError):
    """A group or file token could escape the storage root."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Invalid {field} name {value!r}; path traversal detected.")
        self.field = field
        self.value = value


class MissingField(TreeStoreError):
    """A save request lacks one or more required fields."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class StorageReadFailed(TreeStoreError):
    """A document or the group listing could not be read."""


class StorageWriteFailed(TreeStoreError):
    """A document could not be persisted."""


class UninitializedStore(TreeStoreError):
    """The storage root does not exist yet."""
