"""MIME type to file extension registry.

Maps MIME types to an ordered sequence of extensions; the first extension is
the preferred storage extension. The reserved ExtensionMarker.WILDCARD entry
means "any extension" and is resolved by the caller.
"""

import logging
import re
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from .errors import InvalidMimeMappingError

logger = logging.getLogger(__name__)


class ExtensionMarker(Enum):
    """Reserved registry values that are not literal extensions."""

    WILDCARD = "*"


Extension = Union[str, ExtensionMarker]


class MimeRegistry:
    """Registry of MIME type → ordered extension list.

    Lookups are case-insensitive. An exact MIME type entry wins over a
    ``major/*`` pattern entry.

    Example:
        >>> registry = MimeRegistry({"image/png": "png, jpg", "image/*": "*"})
        >>> registry.extensions_for("image/png")
        ('png', 'jpg')
        >>> registry.extensions_for("image/x-icon")
        (<ExtensionMarker.WILDCARD: '*'>,)
        >>> registry.extensions_for("text/plain") is None
        True
    """

    def __init__(self, mappings: Optional[Mapping[str, object]] = None):
        self._mappings: Dict[str, Tuple[Extension, ...]] = {}
        for mime_type, extensions in (mappings or {}).items():
            self.register(mime_type, extensions)

    def __len__(self) -> int:
        return len(self._mappings)

    def __contains__(self, mime_type: str) -> bool:
        return mime_type.strip().lower() in self._mappings

    def register(self, mime_type: str, extensions: object) -> None:
        """Register or replace the extension list for a MIME type.

        Args:
            mime_type: MIME type or ``major/*`` pattern
            extensions: Comma/space delimited string or iterable of strings

        Raises:
            InvalidMimeMappingError: If the type is blank or no extension is given
        """
        key = (mime_type or "").strip().lower()
        if not key:
            raise InvalidMimeMappingError(str(mime_type), "MIME type cannot be empty")
        parsed = self.parse_extensions(key, extensions)
        self._mappings[key] = parsed

    def extensions_for(self, mime_type: str) -> Optional[Tuple[Extension, ...]]:
        """Return the ordered extensions for a MIME type, or None if unregistered."""
        key = (mime_type or "").strip().lower()
        if not key:
            return None

        if key in self._mappings:
            return self._mappings[key]

        major = key.split("/", 1)[0]
        pattern = f"{major}/*"
        if pattern in self._mappings:
            logger.debug(f"MIME type '{mime_type}' matched pattern '{pattern}'")
            return self._mappings[pattern]

        return None

    @staticmethod
    def parse_extensions(mime_type: str, extensions: object) -> Tuple[Extension, ...]:
        """Normalize a configured extension list.

        Strings are split on commas and whitespace. Leading dots are dropped
        and ``*`` becomes ExtensionMarker.WILDCARD.

        Examples:
            >>> MimeRegistry.parse_extensions("image/png", "png, .jpg")
            ('png', 'jpg')
        """
        if isinstance(extensions, str):
            raw: Iterable = re.split(r"[,\s]+", extensions)
        elif isinstance(extensions, (list, tuple)):
            raw = extensions
        else:
            raise InvalidMimeMappingError(
                mime_type,
                f"expected a string or list, got {type(extensions).__name__}",
            )

        parsed = []
        for value in raw:
            value = str(value).strip().lstrip(".").lower()
            if not value:
                continue
            if value == ExtensionMarker.WILDCARD.value:
                parsed.append(ExtensionMarker.WILDCARD)
            else:
                parsed.append(value)

        if not parsed:
            raise InvalidMimeMappingError(mime_type, "no extensions given")

        return tuple(parsed)
