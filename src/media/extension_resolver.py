"""Storage extension resolution for MIME types."""

import logging
from typing import Optional

from .mime_registry import ExtensionMarker, MimeRegistry

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSION = "jpg"


class ExtensionResolver:
    """Resolves the file extension a media payload is stored with.

    Resolution rules:
    1. Empty MIME type → "" (payload stored without a suffix)
    2. First registry extension for the MIME type wins
    3. A wildcard entry resolves to the default image extension for
       ``image*`` types and to "" for everything else
    4. Unregistered MIME types resolve to "" instead of raising

    Example:
        >>> registry = MimeRegistry({"image/png": "png, jpg", "image/*": "*"})
        >>> resolver = ExtensionResolver(registry, default_image_extension="jpg")
        >>> resolver.resolve("image/png")
        'png'
        >>> resolver.resolve("image/unknown-x")
        'jpg'
        >>> resolver.resolve("")
        ''
    """

    def __init__(
        self,
        registry: MimeRegistry,
        default_image_extension: str = DEFAULT_IMAGE_EXTENSION,
    ):
        self.registry = registry
        self.default_image_extension = default_image_extension.lstrip(".")

    def resolve(self, mime_type: Optional[str]) -> str:
        if not mime_type:
            return ""

        extensions = self.registry.extensions_for(mime_type)
        if not extensions:
            logger.debug(f"No extension registered for MIME type '{mime_type}'")
            return ""

        extension = extensions[0]
        if extension is ExtensionMarker.WILDCARD:
            if mime_type.strip().lower().startswith("image"):
                return self.default_image_extension
            return ""

        return extension
