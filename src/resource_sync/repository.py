"""Resource repository: the public save surface.

ResourceRepository wires the key resolver, locator, placement planner and
upsert engine to an item store and a configuration, and exposes the two save
entry points used by callers.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from src.item_store.models import ManagedItem
from src.media.extension_resolver import ExtensionResolver
from src.media.media_service import MediaService

from .bootstrap import RepositoryBootstrap
from .config_loader import ConfigLoader
from .item_locator import ItemLocator
from .key_resolver import EntityKeyResolver
from .models import ExternalResource, RepositoryConfig
from .placement_planner import PlacementPlanner
from .settings import EnvironmentSettings
from .upsert_engine import UpsertEngine, _utc_now

logger = logging.getLogger(__name__)


class ResourceRepository:
    """Synchronizes external resources into media items of an item store.

    Usage:
        repository = ResourceRepository(store, config)

        # Bootstrap the repository root and upsert
        repository.save(resource)

        # Upsert below a root the caller already holds
        repository.save_under(root, resource, move_to_bucket=True)
    """

    def __init__(
        self,
        store,
        config: RepositoryConfig,
        media: Optional[MediaService] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.store = store
        self.config = config
        self.media = media or MediaService(store, config.media_template_id)

        self.key_resolver = EntityKeyResolver()
        self.extension_resolver = ExtensionResolver(
            ConfigLoader.build_registry(config),
            default_image_extension=config.default_image_extension,
        )
        self.planner = PlacementPlanner(
            store,
            repository_template_id=config.repository_template_id,
            bucket_folder_template_id=config.bucket_folder_template_id,
            bucket_depth=config.bucket_depth,
            key_resolver=self.key_resolver,
        )
        self.engine = UpsertEngine(
            store,
            self.media,
            self.extension_resolver,
            self.planner,
            locator=ItemLocator(store),
            key_resolver=self.key_resolver,
            content_write_policy=config.content_write_policy,
            created_by=config.created_by,
            clock=clock,
        )
        self.bootstrap = RepositoryBootstrap(store)

    @classmethod
    def from_environment(cls, store, **kwargs) -> "ResourceRepository":
        """Build a repository from RESOURCE_SYNC_* environment settings."""
        return cls(store, EnvironmentSettings().load_config(), **kwargs)

    def ensure_root(self) -> ManagedItem:
        """Return the repository root, creating it if needed.

        Raises:
            BootstrapError: If the root cannot be created
        """
        return self.bootstrap.ensure_root(
            self.config.repository_path,
            self.config.folder_template_id,
            self.config.repository_template_id,
        )

    def save(self, resource: ExternalResource) -> ExternalResource:
        """Save a resource below the configured repository root.

        Resources without a name, an external id or a payload are returned
        unchanged without touching the store.

        Args:
            resource: Resource to synchronize

        Returns:
            The same resource

        Raises:
            BootstrapError: If the repository root cannot be created
            ContentWriteError: On content write failure under ContentWritePolicy.RAISE
        """
        if resource is None:
            raise ValueError("resource cannot be None")

        if not resource.name or not resource.external_id or not resource.binary_data:
            logger.debug(
                f"Skipping resource '{resource.external_id}' ({resource.name}): "
                f"incomplete record"
            )
            return resource

        root = self.ensure_root()
        self.save_under(root, resource, move_to_bucket=False)
        return resource

    def save_under(
        self, root: ManagedItem, resource: ExternalResource, move_to_bucket: bool = False
    ) -> None:
        """Save a resource below a root the caller already holds.

        Args:
            root: Repository root item
            resource: Resource to synchronize
            move_to_bucket: Create new items directly in their bucket
        """
        if root is None:
            raise ValueError("root cannot be None")
        if resource is None:
            raise ValueError("resource cannot be None")

        result = self.engine.upsert(root, resource, move_to_bucket=move_to_bucket)
        logger.debug(
            f"Saved resource '{resource.external_id}': {result.state.value} "
            f"(item={result.item_id}, created={result.created}, moved={result.moved})"
        )
