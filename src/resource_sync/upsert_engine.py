"""Upsert engine reconciling external resources with managed items.

One call walks VALIDATING → LOCATING → CREATING or UPDATING → PLACING → DONE.
Invalid input ends in REJECTED without touching the store; a content write
failure under ContentWritePolicy.RAISE ends in FAILED and propagates.

The content write step (extension resolution, payload write and rename)
stages everything in a single edit scope, so a failure there leaves the
item's previously committed state intact. A freshly created item is not
rolled back when its content write fails.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from src.item_store import fields
from src.item_store.models import ManagedItem, join_path
from src.item_store.naming import ItemNameConverter
from src.media.extension_resolver import ExtensionResolver
from src.media.media_service import MediaCreatorOptions, MediaService

from .errors import ContentWriteError, ItemCreationError
from .item_locator import ItemLocator
from .key_resolver import EntityKeyResolver
from .models import (
    ContentWritePolicy,
    ExternalResource,
    PlacementTarget,
    UpsertResult,
    UpsertState,
)
from .placement_planner import PlacementPlanner

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UpsertEngine:
    """Creates, updates and relocates the item for one external resource.

    The engine holds no per-call state; every collaborator is injected.

    Example:
        >>> engine = UpsertEngine(store, media, resolver, planner)
        >>> result = engine.upsert(root, resource, move_to_bucket=True)
        >>> result.state
        <UpsertState.DONE: 'done'>
    """

    def __init__(
        self,
        store,
        media: MediaService,
        extension_resolver: ExtensionResolver,
        planner: PlacementPlanner,
        locator: Optional[ItemLocator] = None,
        key_resolver: Optional[EntityKeyResolver] = None,
        content_write_policy: ContentWritePolicy = ContentWritePolicy.LOG,
        created_by: str = "resource-sync",
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.store = store
        self.media = media
        self.extension_resolver = extension_resolver
        self.planner = planner
        self.locator = locator or ItemLocator(store)
        self.key_resolver = key_resolver or planner.key_resolver
        self.content_write_policy = content_write_policy
        self.created_by = created_by
        self.clock = clock

    def upsert(
        self,
        root: Optional[ManagedItem],
        entity: ExternalResource,
        move_to_bucket: bool = False,
    ) -> UpsertResult:
        """Create or update the item for entity below root.

        Args:
            root: Repository root the item lives under
            entity: Resource to synchronize (never modified)
            move_to_bucket: Create new items directly in their bucket instead
                of creating them under the root and moving them there

        Returns:
            UpsertResult in state DONE or REJECTED

        Raises:
            ContentWriteError: On content write failure under ContentWritePolicy.RAISE
            ItemAlreadyExistsError: If a concurrent call created the item first
            ItemStoreUnavailableError: If the store cannot answer the lookup
        """
        self._transition(UpsertState.VALIDATING, entity)
        if not self.is_valid(root, entity):
            self._transition(UpsertState.REJECTED, entity)
            return UpsertResult(state=UpsertState.REJECTED)

        self._transition(UpsertState.LOCATING, entity)
        key = self.key_resolver.key(root, entity)
        item = self.locator.find(root, key)
        target = self.planner.plan_parent(root, entity)

        created = item is None
        if created:
            self._transition(UpsertState.CREATING, entity)
            item = self.create_entity_item(root, target, entity, key, move_to_bucket)
        else:
            self._transition(UpsertState.UPDATING, entity)

        content_error = self.update_entity_item(item, entity, created=created)

        self._transition(UpsertState.PLACING, entity)
        moved = self.move_to_immediate_root(target, item)

        self._transition(UpsertState.DONE, entity)
        return UpsertResult(
            state=UpsertState.DONE,
            item_id=item.item_id,
            created=created,
            moved=moved,
            content_error=content_error,
        )

    def is_valid(self, root: Optional[ManagedItem], entity: ExternalResource) -> bool:
        if root is None or entity is None:
            return False
        if not entity.name or not entity.external_id or not entity.binary_data:
            logger.debug(
                f"Rejecting resource '{entity.external_id}' ({entity.name}): "
                f"name, external id and payload are required"
            )
            return False
        if self.store.get_item_by_id(root.item_id) is None:
            logger.warning(f"Repository root {root.path} is not part of the item store")
            return False
        return True

    def entity_item_name(self, entity: ExternalResource) -> str:
        return ItemNameConverter.propose_valid_item_name(entity.name)

    def create_entity_item(
        self,
        root: ManagedItem,
        target: PlacementTarget,
        entity: ExternalResource,
        key: str,
        move_to_bucket: bool,
    ) -> ManagedItem:
        """Create the media item for entity and tag it for bucketing.

        Raises:
            ItemCreationError: If the media subsystem returns no item
            ContentWriteError: If the extension cannot be resolved under
                ContentWritePolicy.RAISE (nothing is created)
        """
        extension = self._creation_extension(entity)
        container = self.planner.ensure_container(target) if move_to_bucket else root
        destination = join_path(container.path, self.entity_item_name(entity))
        full_path = f"{destination}.{extension}" if extension else destination

        options = MediaCreatorOptions(
            destination=destination,
            alternate_text=entity.name,
            overwrite_existing=True,
            item_id=key,
            parent=container,
        )
        item = self.media.create_from_stream(entity.binary_data, full_path, options)
        if item is None:
            raise ItemCreationError(entity.external_id, destination)

        with self.store.editing(item) as edit:
            edit.set_field(fields.BUCKETABLE, "1")
            edit.set_field(fields.EXTERNAL_ID, entity.external_id)
            edit.set_field(fields.CREATED, self.clock().isoformat())
            edit.set_field(fields.CREATED_BY, self.created_by)

        logger.info(
            f"Created item {item.path} ({item.item_id}) for resource '{entity.external_id}'"
        )
        return item

    def update_entity_item(
        self, item: ManagedItem, entity: ExternalResource, created: bool = False
    ) -> Optional[Exception]:
        """Write the payload and the final name onto item.

        Returns:
            The captured failure under ContentWritePolicy.LOG, else None

        Raises:
            ContentWriteError: On failure under ContentWritePolicy.RAISE
        """
        try:
            extension = self.extension_resolver.resolve(entity.mime_type)
            handle = self.media.get_media_handle(item)
            with self.store.editing(item) as edit:
                handle.set_stream(
                    entity.binary_data, extension, edit=edit, mime_type=entity.mime_type
                )
                edit.rename(self.entity_item_name(entity))
        except Exception as e:
            if self.content_write_policy is ContentWritePolicy.RAISE:
                self._transition(UpsertState.FAILED, entity)
                raise ContentWriteError(
                    entity.external_id,
                    entity.name,
                    str(e),
                    item_id=item.item_id,
                    created=created,
                ) from e

            logger.error(
                f"Failed to write content for resource '{entity.external_id}' "
                f"({entity.name}) onto item {item.item_id}: {e}",
                exc_info=True,
            )
            return e

        return None

    def _creation_extension(self, entity: ExternalResource) -> str:
        # Under LOG the item is created without suffix; the content pass that
        # follows resolves again and reports the failure in the result.
        try:
            return self.extension_resolver.resolve(entity.mime_type)
        except Exception as e:
            if self.content_write_policy is ContentWritePolicy.RAISE:
                self._transition(UpsertState.FAILED, entity)
                raise ContentWriteError(
                    entity.external_id, entity.name, str(e), created=False
                ) from e

            logger.warning(
                f"Cannot resolve extension for resource '{entity.external_id}' "
                f"({entity.name}), creating it without one: {e}"
            )
            return ""

    def move_to_immediate_root(self, target: PlacementTarget, item: ManagedItem) -> bool:
        """Move item under the planned parent unless it is already there."""
        container = self.planner.ensure_container(target)
        if item.parent_id == container.item_id:
            return False

        old_path = item.path
        self.store.move_item(item, container)
        logger.info(f"Moved item {item.item_id} from {old_path} to {item.path}")
        return True

    @staticmethod
    def _transition(state: UpsertState, entity: ExternalResource) -> None:
        external_id = entity.external_id if entity is not None else None
        logger.debug(f"Upsert '{external_id}': {state.value}")
