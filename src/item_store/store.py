"""Item store contract and in-memory implementation.

The resource sync library never talks to a CMS directly. It depends on the
narrow ItemStore contract defined here. InMemoryItemStore is a complete
reference implementation backed by dictionaries, used by the test suite and
for local runs.
"""

import logging
import threading
import uuid
from typing import Any, Dict, List, Optional, Protocol

from .edit_context import EditContext
from .errors import (
    AccessDeniedError,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    ItemStoreError,
)
from .models import ManagedItem, join_path, split_path
from .security import elevated_scope, is_privileged

logger = logging.getLogger(__name__)


class ItemStore(Protocol):
    """Operations the sync library needs from a content tree."""

    def get_item(self, path: str, token=None) -> Optional[ManagedItem]: ...

    def get_item_by_id(self, item_id: str) -> Optional[ManagedItem]: ...

    def get_child(self, parent: ManagedItem, name: str) -> Optional[ManagedItem]: ...

    def get_children(self, item: ManagedItem) -> List[ManagedItem]: ...

    def get_parent(self, item: ManagedItem) -> Optional[ManagedItem]: ...

    def is_descendant(self, item: ManagedItem, ancestor: ManagedItem) -> bool: ...

    def create_item(
        self,
        name: str,
        parent: ManagedItem,
        template_id: str,
        item_id: Optional[str] = None,
    ) -> ManagedItem: ...

    def create_path(
        self,
        path: str,
        folder_template_id: str,
        leaf_template_id: str,
        token=None,
    ) -> Optional[ManagedItem]: ...

    def move_item(self, item: ManagedItem, new_parent: ManagedItem) -> None: ...

    def editing(self, item: ManagedItem) -> EditContext: ...

    def commit_edit(
        self, item: ManagedItem, fields: Dict[str, Any], name: Optional[str]
    ) -> None: ...

    def elevated(self, purpose: str = "unspecified"): ...


class InMemoryItemStore:
    """Dictionary-backed content tree.

    Items are unique by id; sibling names are not required to be unique,
    path lookups return the first match in creation order. Path lookups are
    case-insensitive.

    When ``restricted`` is True, structural path creation (create_path)
    requires a live PrivilegeToken obtained from ``elevated()``. Reads accept a
    token for contract symmetry but never require one.

    Example:
        >>> store = InMemoryItemStore()
        >>> with store.elevated("setup") as token:
        ...     root = store.create_path("/sitecore/media/Resources",
        ...                              "folder", "repository", token=token)
        >>> store.get_item("/sitecore/media/Resources") is root
        True
    """

    def __init__(
        self,
        root_name: str = "sitecore",
        root_template_id: str = "system/root",
        restricted: bool = False,
    ):
        self.restricted = restricted
        self.mutation_count = 0
        self._lock = threading.RLock()
        self._items: Dict[str, ManagedItem] = {}
        self._children: Dict[str, List[str]] = {}

        tree_root = ManagedItem(
            item_id=uuid.uuid4().hex,
            name=root_name,
            template_id=root_template_id,
            parent_id=None,
            path=join_path(root_name),
        )
        self._items[tree_root.item_id] = tree_root
        self._children[tree_root.item_id] = []
        self.tree_root = tree_root

    def __len__(self) -> int:
        return len(self._items)

    # Reads

    def get_item(self, path: str, token=None) -> Optional[ManagedItem]:
        """Return the item at path, or None. Reads never require a token."""
        segments = split_path(path)
        if not segments or segments[0].lower() != self.tree_root.name.lower():
            return None
        with self._lock:
            current = self.tree_root
            for segment in segments[1:]:
                current = self.get_child(current, segment)
                if current is None:
                    return None
            return current

    def get_item_by_id(self, item_id: str) -> Optional[ManagedItem]:
        with self._lock:
            return self._items.get(item_id)

    def get_child(self, parent: ManagedItem, name: str) -> Optional[ManagedItem]:
        with self._lock:
            for child_id in self._children.get(parent.item_id, []):
                child = self._items[child_id]
                if child.name.lower() == name.lower():
                    return child
        return None

    def get_children(self, item: ManagedItem) -> List[ManagedItem]:
        with self._lock:
            return [self._items[child_id] for child_id in self._children.get(item.item_id, [])]

    def get_parent(self, item: ManagedItem) -> Optional[ManagedItem]:
        if item.parent_id is None:
            return None
        return self.get_item_by_id(item.parent_id)

    def is_descendant(self, item: ManagedItem, ancestor: ManagedItem) -> bool:
        """Return True when ancestor lies strictly above item in the tree."""
        with self._lock:
            parent_id = item.parent_id
            while parent_id is not None:
                if parent_id == ancestor.item_id:
                    return True
                parent_id = self._items[parent_id].parent_id
        return False

    # Writes

    def create_item(
        self,
        name: str,
        parent: ManagedItem,
        template_id: str,
        item_id: Optional[str] = None,
    ) -> ManagedItem:
        """Create a child item under parent.

        Raises:
            ItemNotFoundError: If parent is not part of this store
            ItemAlreadyExistsError: If item_id is already taken
        """
        with self._lock:
            if parent.item_id not in self._items:
                raise ItemNotFoundError(parent.item_id)
            item_id = item_id or uuid.uuid4().hex
            if item_id in self._items:
                raise ItemAlreadyExistsError(item_id, self._items[item_id].path)

            item = ManagedItem(
                item_id=item_id,
                name=name,
                template_id=template_id,
                parent_id=parent.item_id,
                path=join_path(parent.path, name),
            )
            self._items[item_id] = item
            self._children[item_id] = []
            self._children[parent.item_id].append(item_id)
            self.mutation_count += 1

        logger.debug(f"Created item {item.path} ({item_id}, template {template_id})")
        return item

    def create_path(
        self,
        path: str,
        folder_template_id: str,
        leaf_template_id: str,
        token=None,
    ) -> Optional[ManagedItem]:
        """Create every missing segment of path and return the leaf item.

        Existing segments are reused. Missing intermediate segments use the
        folder template, a missing leaf uses the leaf template.

        Raises:
            AccessDeniedError: If the store is restricted and token is not live
            ItemStoreError: If path is not below the tree root
        """
        if self.restricted and not is_privileged(token):
            raise AccessDeniedError("create_path", path)

        segments = split_path(path)
        if not segments or segments[0].lower() != self.tree_root.name.lower():
            raise ItemStoreError(f"Path {path} is not below the tree root {self.tree_root.path}")

        with self._lock:
            current = self.tree_root
            last_index = len(segments) - 1
            for index, segment in enumerate(segments[1:], start=1):
                child = self.get_child(current, segment)
                if child is None:
                    template_id = leaf_template_id if index == last_index else folder_template_id
                    child = self.create_item(segment, current, template_id)
                current = child
            return current

    def move_item(self, item: ManagedItem, new_parent: ManagedItem) -> None:
        """Re-parent item under new_parent, keeping its id and fields.

        Raises:
            ItemNotFoundError: If either item is not part of this store
            ItemStoreError: If new_parent is item itself or one of its descendants
        """
        with self._lock:
            if item.item_id not in self._items:
                raise ItemNotFoundError(item.item_id)
            if new_parent.item_id not in self._items:
                raise ItemNotFoundError(new_parent.item_id)
            if new_parent.item_id == item.item_id or self.is_descendant(new_parent, item):
                raise ItemStoreError(
                    f"Cannot move {item.path} below itself ({new_parent.path})"
                )
            if item.parent_id == new_parent.item_id:
                return

            old_path = item.path
            self._children[item.parent_id].remove(item.item_id)
            self._children[new_parent.item_id].append(item.item_id)
            item.parent_id = new_parent.item_id
            self._refresh_paths(item, new_parent.path)
            self.mutation_count += 1

        logger.debug(f"Moved item {item.item_id} from {old_path} to {item.path}")

    def editing(self, item: ManagedItem) -> EditContext:
        return EditContext(self, item)

    def commit_edit(
        self, item: ManagedItem, fields: Dict[str, Any], name: Optional[str]
    ) -> None:
        with self._lock:
            if item.item_id not in self._items:
                raise ItemNotFoundError(item.item_id)
            item.fields.update(fields)
            if name is not None and name != item.name:
                item.name = name
                parent = self.get_parent(item)
                self._refresh_paths(item, parent.path if parent else "")
            self.mutation_count += 1

    def elevated(self, purpose: str = "unspecified"):
        return elevated_scope(purpose)

    def _refresh_paths(self, item: ManagedItem, parent_path: str) -> None:
        item.path = join_path(parent_path, item.name)
        for child_id in self._children[item.item_id]:
            self._refresh_paths(self._items[child_id], item.path)
