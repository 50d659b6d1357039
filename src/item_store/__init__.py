"""Item store contracts for resource synchronization.

This package defines the narrow interface the sync library uses to read and
mutate a content tree, plus a dictionary-backed implementation of it.
"""

from .edit_context import EditContext
from .errors import (
    SyncError,
    ItemStoreError,
    ItemNotFoundError,
    ItemAlreadyExistsError,
    ItemStoreUnavailableError,
    AccessDeniedError,
    EditContextError,
)
from .models import ManagedItem, join_path, split_path
from .naming import ItemNameConverter
from .security import PrivilegeToken, elevated_scope, is_privileged
from .store import InMemoryItemStore, ItemStore

__all__ = [
    "EditContext",
    "SyncError",
    "ItemStoreError",
    "ItemNotFoundError",
    "ItemAlreadyExistsError",
    "ItemStoreUnavailableError",
    "AccessDeniedError",
    "EditContextError",
    "ManagedItem",
    "join_path",
    "split_path",
    "ItemNameConverter",
    "PrivilegeToken",
    "elevated_scope",
    "is_privileged",
    "InMemoryItemStore",
    "ItemStore",
]
