"""Bucket placement planning for synchronized items.

Items are filed below the repository root in bucket folders derived from
their key: with a depth of 3 the key ``3fa8...`` is filed under
``<root>/3/f/a``. The plan only depends on the root and the entity, never on
where the item currently lives, so repeated saves converge.
"""

import logging
from typing import Optional

from src.item_store.errors import ItemNotFoundError
from src.item_store.models import ManagedItem, join_path

from .key_resolver import EntityKeyResolver
from .models import ExternalResource, PlacementTarget

logger = logging.getLogger(__name__)


class PlacementPlanner:
    """Plans and materializes the immediate parent of a synchronized item.

    Example:
        >>> planner = PlacementPlanner(store, "resource-repository", bucket_depth=2)
        >>> target = planner.plan_parent(root, resource)
        >>> target.segments
        ('3', 'f')
    """

    def __init__(
        self,
        store,
        repository_template_id: str,
        bucket_folder_template_id: str = "common/bucket-folder",
        bucket_depth: int = 3,
        key_resolver: Optional[EntityKeyResolver] = None,
    ):
        if bucket_depth < 0:
            raise ValueError(f"bucket_depth must be >= 0, got {bucket_depth}")
        self.store = store
        self.repository_template_id = repository_template_id
        self.bucket_folder_template_id = bucket_folder_template_id
        self.bucket_depth = bucket_depth
        self.key_resolver = key_resolver or EntityKeyResolver()

    def plan_parent(self, root: ManagedItem, entity: ExternalResource) -> PlacementTarget:
        """Plan the bucket an entity belongs in below root."""
        key = self.key_resolver.key(root, entity)
        segments = tuple(key[:self.bucket_depth])
        return PlacementTarget(
            root=root,
            path=join_path(root.path, *segments),
            segments=segments,
        )

    def plan_parent_of(self, item: ManagedItem, entity: ExternalResource) -> PlacementTarget:
        """Plan the bucket for an existing item, starting from the item itself.

        Raises:
            ItemNotFoundError: If no repository root lies above item
        """
        root = self._find_repository_root(item)
        if root is None:
            raise ItemNotFoundError(f"repository root above {item.path}")
        return self.plan_parent(root, entity)

    def ensure_container(self, target: PlacementTarget) -> ManagedItem:
        """Return the item at target, creating missing bucket folders.

        Only children built from the bucket folder template count as buckets;
        a media item that happens to share a segment name is left alone.
        """
        current = target.root
        for segment in target.segments:
            child = self._bucket_child(current, segment)
            if child is None:
                child = self.store.create_item(segment, current, self.bucket_folder_template_id)
                logger.debug(f"Created bucket folder {child.path}")
            current = child
        return current

    def _bucket_child(self, parent: ManagedItem, segment: str) -> Optional[ManagedItem]:
        for child in self.store.get_children(parent):
            if (
                child.template_id == self.bucket_folder_template_id
                and child.name.lower() == segment.lower()
            ):
                return child
        return None

    def _find_repository_root(self, item: ManagedItem) -> Optional[ManagedItem]:
        current = self.store.get_parent(item)
        while current is not None:
            if current.template_id == self.repository_template_id:
                return current
            current = self.store.get_parent(current)
        return None
