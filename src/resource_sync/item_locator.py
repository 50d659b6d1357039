"""Scoped lookup of synchronized items by key."""

import logging
from typing import Optional

from src.item_store.models import ManagedItem

logger = logging.getLogger(__name__)


class ItemLocator:
    """Finds the item stored for a key below a repository root.

    Absence is reported as None. Store failures such as
    ItemStoreUnavailableError propagate unchanged. The locator never mutates
    the store.
    """

    def __init__(self, store):
        self.store = store

    def find(self, root: ManagedItem, key: str) -> Optional[ManagedItem]:
        """Return the item with id key when it lives below root.

        Args:
            root: Repository root that scopes the lookup
            key: Entity key from EntityKeyResolver

        Returns:
            The matching item, or None if there is none below root
        """
        item = self.store.get_item_by_id(key)
        if item is None:
            return None

        if not self.store.is_descendant(item, root):
            logger.warning(
                f"Item {key} exists at {item.path}, outside repository root "
                f"{root.path}; treating as not found"
            )
            return None

        return item
