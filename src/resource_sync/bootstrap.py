"""Repository root bootstrap.

Ensures the repository root item exists at its configured path before any
resource is saved. A missing root is unrecoverable, so failure is raised as
BootstrapError rather than reported.
"""

import logging

from src.item_store.errors import ItemStoreError
from src.item_store.models import ManagedItem

from .errors import BootstrapError

logger = logging.getLogger(__name__)


class RepositoryBootstrap:
    """Finds or creates the repository root with elevated privileges.

    Example:
        >>> bootstrap = RepositoryBootstrap(store)
        >>> root = bootstrap.ensure_root(
        ...     "/sitecore/media library/Commerce/Resources",
        ...     "common/folder", "resource-repository")
        >>> bootstrap.ensure_root(root.path, "common/folder", "resource-repository") is root
        True
    """

    def __init__(self, store):
        self.store = store

    def ensure_root(
        self, path: str, folder_template_id: str, item_template_id: str
    ) -> ManagedItem:
        """Return the item at path, creating the path if it is missing.

        Args:
            path: Tree path of the repository root
            folder_template_id: Template for missing intermediate segments
            item_template_id: Template for the root item itself

        Returns:
            The repository root item

        Raises:
            BootstrapError: If the root cannot be created
        """
        with self.store.elevated("repository bootstrap") as token:
            root = self.store.get_item(path, token=token)
            if root is not None:
                return root

            logger.info(f"Resource repository not found at {path}, creating it")
            try:
                root = self.store.create_path(
                    path, folder_template_id, item_template_id, token=token
                )
            except ItemStoreError as e:
                raise BootstrapError(path, str(e)) from e

            if root is None:
                raise BootstrapError(path)

            logger.info(f"Created resource repository {root.path} ({root.item_id})")
            return root
