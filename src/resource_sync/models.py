"""Data models for resource synchronization.

This module defines all data models used by the resource sync library.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from src.item_store.models import ManagedItem


class ContentWritePolicy(Enum):
    """What the upsert engine does when writing content onto an item fails.

    - LOG: log the failure with the resource's external id and name and
      report the upsert as completed; the item may be left partially updated
    - RAISE: abort the upsert and raise ContentWriteError to the caller
    """

    LOG = "log"
    RAISE = "raise"


class UpsertState(Enum):
    """States of a single upsert call."""

    VALIDATING = "validating"
    LOCATING = "locating"
    CREATING = "creating"
    UPDATING = "updating"
    PLACING = "placing"
    DONE = "done"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class ExternalResource:
    """An external resource record to synchronize.

    Read-only from the library's point of view.

    Attributes:
        external_id: Stable identity of the resource in the external system
        name: Display name, also the seed for the item name
        mime_type: MIME type of the payload (optional)
        binary_data: Payload bytes (required for a successful save)

    Example:
        >>> resource = ExternalResource(
        ...     external_id="ext-1", name="Logo",
        ...     mime_type="image/png", binary_data=b"...")
    """
    external_id: str
    name: str
    mime_type: Optional[str] = None
    binary_data: Optional[bytes] = None


@dataclass(frozen=True)
class PlacementTarget:
    """The planned immediate parent of an item.

    Attributes:
        root: The repository root the target belongs to
        path: Full tree path of the planned parent
        segments: Bucket folder names below the root (empty when the root
            itself is the target)
    """
    root: ManagedItem
    path: str
    segments: Tuple[str, ...] = ()


@dataclass
class UpsertResult:
    """Outcome of one upsert call.

    Attributes:
        state: Terminal state reached (DONE, REJECTED or FAILED)
        item_id: Id of the item created or updated (None when rejected)
        created: True when the item did not exist before the call
        moved: True when the item was relocated during the call
        content_error: Content write failure captured under ContentWritePolicy.LOG
    """
    state: UpsertState
    item_id: Optional[str] = None
    created: bool = False
    moved: bool = False
    content_error: Optional[Exception] = None


@dataclass
class RepositoryConfig:
    """Configuration of a resource repository.

    Attributes:
        repository_path: Tree path of the repository root
        repository_template_id: Template of the repository root item
        folder_template_id: Template for intermediate folders of the root path
        bucket_folder_template_id: Template for bucket folders below the root
        media_template_id: Template for created media items
        bucket_depth: Number of bucket folder levels below the root
        default_image_extension: Extension used when an image type maps to "*"
        created_by: Source recorded in the __Created by field of new items
        content_write_policy: Failure policy for the content write step
        mime_types: MIME type → extensions (list or delimited string)
    """
    repository_path: str
    repository_template_id: str
    folder_template_id: str = "common/folder"
    bucket_folder_template_id: str = "common/bucket-folder"
    media_template_id: str = "system/media/unversioned/file"
    bucket_depth: int = 3
    default_image_extension: str = "jpg"
    created_by: str = "resource-sync"
    content_write_policy: ContentWritePolicy = ContentWritePolicy.LOG
    mime_types: Dict[str, object] = field(default_factory=dict)
