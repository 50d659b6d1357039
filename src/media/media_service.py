"""Media handles and media item creation on top of an item store.

A media item is a regular managed item whose media stream lives in the Blob,
Extension, Size and Mime Type fields. MediaHandle writes those fields,
MediaService creates new media items from a byte payload.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.item_store import fields
from src.item_store.edit_context import EditContext
from src.item_store.models import ManagedItem, join_path, split_path
from src.item_store.naming import ItemNameConverter

from .errors import MediaCreationError

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TEMPLATE_ID = "system/media/unversioned/file"


@dataclass
class MediaCreatorOptions:
    """Options for MediaService.create_from_stream.

    Attributes:
        destination: Tree path of the media item, without extension
        alternate_text: Value for the Alt field (skipped when empty)
        overwrite_existing: Reuse an existing item at destination instead of
            creating a sibling with the same name
        item_id: Id for a newly created item (store-generated when None)
        template_id: Template for a newly created item (service default when None)
        parent: Parent item to create under; when None the parent is looked
            up from the destination path
    """
    destination: str
    alternate_text: str = ""
    overwrite_existing: bool = True
    item_id: Optional[str] = None
    template_id: Optional[str] = None
    parent: Optional[ManagedItem] = None


class MediaHandle:
    """Writes the media stream of a single item."""

    def __init__(self, store, item: ManagedItem):
        self._store = store
        self.item = item

    def set_stream(
        self,
        data: bytes,
        extension: str,
        edit: Optional[EditContext] = None,
        mime_type: Optional[str] = None,
    ) -> None:
        """Store data as the item's media stream.

        When edit is given the stream is staged into that scope and committed
        together with the caller's other changes; otherwise it is written in
        its own edit scope.
        """
        if edit is None:
            with self._store.editing(self.item) as own_edit:
                self._stage(own_edit, data, extension, mime_type)
        else:
            self._stage(edit, data, extension, mime_type)

    def get_stream(self) -> Optional[bytes]:
        return self.item.get_field(fields.BLOB)

    @property
    def extension(self) -> str:
        return self.item.get_field(fields.EXTENSION, "")

    @staticmethod
    def _stage(edit: EditContext, data: bytes, extension: str, mime_type: Optional[str]) -> None:
        edit.set_field(fields.BLOB, bytes(data))
        edit.set_field(fields.EXTENSION, extension or "")
        edit.set_field(fields.SIZE, str(len(data)))
        if mime_type:
            edit.set_field(fields.MIME_TYPE, mime_type)


class MediaService:
    """Media subsystem facade used by the resource repository.

    Example:
        >>> media = MediaService(store)
        >>> item = media.create_from_stream(
        ...     b"...", "/sitecore/media/Resources/Logo.png",
        ...     MediaCreatorOptions(destination="/sitecore/media/Resources/Logo"))
        >>> media.get_media_handle(item).extension
        'png'
    """

    def __init__(self, store, media_template_id: str = DEFAULT_MEDIA_TEMPLATE_ID):
        self.store = store
        self.media_template_id = media_template_id

    def get_media_handle(self, item: ManagedItem) -> MediaHandle:
        return MediaHandle(self.store, item)

    def create_from_stream(
        self,
        data: bytes,
        full_path: str,
        options: MediaCreatorOptions,
    ) -> ManagedItem:
        """Create (or overwrite) a media item from a byte payload.

        Args:
            data: Payload bytes
            full_path: Destination path including the file extension
            options: Creation options; options.destination is the item path

        Returns:
            The created or overwritten media item

        Raises:
            MediaCreationError: If the destination parent does not exist
            ItemAlreadyExistsError: If options.item_id is already used elsewhere
        """
        destination = options.destination or full_path
        extension = self._extension_of(full_path, destination)

        segments = split_path(destination)
        if len(segments) < 2:
            raise MediaCreationError(destination, "destination must have a parent")

        parent = options.parent
        if parent is None:
            parent = self.store.get_item(join_path(*segments[:-1]))
        if parent is None:
            raise MediaCreationError(destination, "parent item does not exist")

        item_name = ItemNameConverter.propose_valid_item_name(segments[-1])
        item = self._reusable_item(parent, item_name, options)
        if item is None:
            item = self.store.create_item(
                item_name,
                parent,
                options.template_id or self.media_template_id,
                item_id=options.item_id,
            )
            logger.info(f"Created media item {item.path} ({item.item_id})")
        else:
            logger.info(f"Overwriting media item {item.path} ({item.item_id})")

        with self.store.editing(item) as edit:
            MediaHandle(self.store, item).set_stream(data, extension, edit=edit)
            if options.alternate_text:
                edit.set_field(fields.ALT, options.alternate_text)

        return item

    def _reusable_item(
        self, parent: ManagedItem, item_name: str, options: MediaCreatorOptions
    ) -> Optional[ManagedItem]:
        if not options.overwrite_existing:
            return None
        existing = self.store.get_child(parent, item_name)
        if existing is None:
            return None
        # Never take over an item that belongs to a different id.
        if options.item_id is not None and existing.item_id != options.item_id:
            return None
        return existing

    @staticmethod
    def _extension_of(full_path: str, destination: str) -> str:
        if full_path != destination and full_path.startswith(destination + "."):
            return full_path[len(destination) + 1:]
        return ""
