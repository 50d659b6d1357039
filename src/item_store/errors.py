"""Typed exception hierarchy for item store errors.

This module defines the exceptions raised by the item store collaborators.
All exceptions inherit from SyncError so callers can catch any
application-level failure of the resource sync library in one place.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all resource-sync errors.

    Use this to catch any application-level error from the library.
    """
    pass


class ItemStoreError(SyncError):
    """Base exception for all item store errors."""
    pass


class ItemNotFoundError(ItemStoreError):
    """Raised when an operation targets an item that does not exist."""

    def __init__(self, reference: str):
        super().__init__(f"Item {reference} not found")
        self.reference = reference


class ItemAlreadyExistsError(ItemStoreError):
    """Raised when creating an item whose id is already taken."""

    def __init__(self, item_id: str, path: Optional[str] = None):
        if path:
            message = f"Item with id '{item_id}' already exists at {path}"
        else:
            message = f"Item with id '{item_id}' already exists"
        super().__init__(message)
        self.item_id = item_id
        self.path = path


class ItemStoreUnavailableError(ItemStoreError):
    """Raised when the backing store cannot serve a request.

    Distinct from absence: a lookup that finds nothing returns None, a lookup
    that cannot be answered raises this.
    """

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Item store unavailable during '{operation}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.operation = operation
        self.reason = reason


class AccessDeniedError(ItemStoreError):
    """Raised when a restricted operation runs without an active privilege token."""

    def __init__(self, operation: str, path: str):
        super().__init__(f"Access denied for '{operation}' on {path}")
        self.operation = operation
        self.path = path


class EditContextError(ItemStoreError):
    """Raised when an edit scope is used outside its lifetime."""

    def __init__(self, message: str):
        super().__init__(message)
