"""Typed exception hierarchy for media errors."""

from typing import Optional

from src.item_store.errors import SyncError


class MediaError(SyncError):
    """Base exception for all media subsystem errors."""
    pass


class MediaCreationError(MediaError):
    """Raised when a media item cannot be created from a stream."""

    def __init__(self, destination: str, reason: Optional[str] = None):
        message = f"Failed to create media item at {destination}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.destination = destination
        self.reason = reason


class InvalidMimeMappingError(MediaError):
    """Raised when a MIME type registry entry cannot be parsed."""

    def __init__(self, mime_type: str, reason: str):
        super().__init__(f"Invalid extension mapping for '{mime_type}': {reason}")
        self.mime_type = mime_type
        self.reason = reason
