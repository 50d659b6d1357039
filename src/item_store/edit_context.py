"""Transactional write scope for item field and name changes.

An EditContext stages field writes and a rename in memory. Leaving the
with-block normally commits all staged changes in one store call; leaving it
through an exception discards them, so the item keeps its previously
committed state.
"""

import logging
from typing import Any, Dict, Optional

from .errors import EditContextError
from .models import ManagedItem

logger = logging.getLogger(__name__)


class EditContext:
    """Scoped edit of a single item.

    Example:
        >>> with store.editing(item) as edit:
        ...     edit.set_field("Alt", "Logo")
        ...     edit.rename("Logo")
    """

    def __init__(self, store, item: ManagedItem):
        self._store = store
        self.item = item
        self._fields: Dict[str, Any] = {}
        self._name: Optional[str] = None
        self._open = False
        self.committed = False

    def __enter__(self) -> "EditContext":
        if self.committed:
            raise EditContextError(
                f"Edit scope for item {self.item.item_id} was already committed"
            )
        self._open = True
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._open = False
        if exc_type is not None:
            logger.debug(
                f"Discarding {len(self._fields)} staged field(s) for item "
                f"{self.item.item_id} after {exc_type.__name__}"
            )
            self._fields.clear()
            self._name = None
            return False
        self.commit()
        return False

    def set_field(self, name: str, value: Any) -> None:
        self._ensure_open()
        self._fields[name] = value

    def rename(self, name: str) -> None:
        self._ensure_open()
        self._name = name

    @property
    def staged_fields(self) -> Dict[str, Any]:
        return dict(self._fields)

    @property
    def staged_name(self) -> Optional[str]:
        return self._name

    def commit(self) -> None:
        """Write the staged changes to the store in one operation."""
        if self.committed:
            return
        self._store.commit_edit(self.item, self._fields, self._name)
        self.committed = True
        logger.debug(
            f"Committed edit for item {self.item.item_id} "
            f"({len(self._fields)} field(s), rename={self._name is not None})"
        )

    def _ensure_open(self) -> None:
        if not self._open:
            raise EditContextError(
                f"Edit scope for item {self.item.item_id} is not open"
            )
