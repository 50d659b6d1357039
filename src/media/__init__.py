"""Media subsystem for resource synchronization.

This package resolves storage extensions from MIME types and reads and writes
media streams on managed items.
"""

from .errors import MediaError, MediaCreationError, InvalidMimeMappingError
from .extension_resolver import ExtensionResolver, DEFAULT_IMAGE_EXTENSION
from .media_service import MediaCreatorOptions, MediaHandle, MediaService
from .mime_registry import ExtensionMarker, MimeRegistry

__all__ = [
    "MediaError",
    "MediaCreationError",
    "InvalidMimeMappingError",
    "ExtensionResolver",
    "DEFAULT_IMAGE_EXTENSION",
    "MediaCreatorOptions",
    "MediaHandle",
    "MediaService",
    "ExtensionMarker",
    "MimeRegistry",
]
