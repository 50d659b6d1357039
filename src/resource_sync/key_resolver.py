"""Entity key resolution for external resources."""

import uuid

from src.item_store.models import ManagedItem

from .models import ExternalResource

# Fixed namespace so keys stay stable across processes and releases.
RESOURCE_KEY_NAMESPACE = uuid.UUID("5b0c1c3e-7f4a-4d55-9a4c-2f6e0d1b8a71")


class EntityKeyResolver:
    """Derives the lookup key of a resource under a repository root.

    The key is a UUID5 hex digest over the root id and the external id. It
    doubles as the id of the item created for the resource, so the store's
    id uniqueness guarantees one item per external id.

    Example:
        >>> resolver = EntityKeyResolver()
        >>> resolver.key(root, resource) == resolver.key(root, resource)
        True
    """

    def key(self, root: ManagedItem, entity: ExternalResource) -> str:
        return uuid.uuid5(
            RESOURCE_KEY_NAMESPACE, f"{root.item_id}|{entity.external_id}"
        ).hex
