"""Data models for the item store.

This module defines the tree node handed out by item stores. All models use
dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

PATH_SEPARATOR = "/"


@dataclass
class ManagedItem:
    """A node in the content tree, addressable by path and by id.

    Items are owned by the store. Callers read them freely but change them
    only through store operations (create, move) and edit scopes.

    Attributes:
        item_id: Unique identifier of the item
        name: Item name, the last segment of its path
        template_id: Template the item was created from
        parent_id: Id of the parent item (None for the tree root)
        path: Full path, kept current by the store on rename and move
        fields: Field values keyed by field name

    Example:
        >>> item = ManagedItem(item_id="42", name="Logo", template_id="file",
        ...                    parent_id="7", path="/media/Logo")
        >>> item.get_field("Alt", "")
        ''
    """
    item_id: str
    name: str
    template_id: str
    parent_id: Optional[str]
    path: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def get_field(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


def split_path(path: str) -> list:
    """Split a tree path into its non-empty segments.

    Examples:
        >>> split_path("/sitecore/media library/Logo")
        ['sitecore', 'media library', 'Logo']
    """
    return [segment for segment in path.split(PATH_SEPARATOR) if segment]


def join_path(*parts: str) -> str:
    """Join path parts into a normalized absolute tree path.

    Examples:
        >>> join_path("/sitecore/media", "a", "b")
        '/sitecore/media/a/b'
    """
    segments = []
    for part in parts:
        segments.extend(split_path(part))
    return PATH_SEPARATOR + PATH_SEPARATOR.join(segments)
