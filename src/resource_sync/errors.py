"""Typed exception hierarchy for resource sync errors.

This module defines the exceptions raised by the resource repository and its
upsert engine. All exceptions inherit from ResourceSyncError, itself a
SyncError, and carry the context needed for out-of-band remediation.
"""

from typing import Optional

from src.item_store.errors import SyncError


class ResourceSyncError(SyncError):
    """Base exception for all resource sync errors."""
    pass


class BootstrapError(ResourceSyncError):
    """Raised when the repository root cannot be found or created."""

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"Cannot find or create resource repository item at {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason


class ContentWriteError(ResourceSyncError):
    """Raised when writing a resource's payload or name onto its item fails."""

    def __init__(
        self,
        external_id: str,
        name: str,
        reason: Optional[str] = None,
        item_id: Optional[str] = None,
        created: bool = False,
    ):
        message = f"Failed to write content for resource '{external_id}' ({name})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.external_id = external_id
        self.name = name
        self.reason = reason
        self.item_id = item_id
        self.created = created


class ItemCreationError(ResourceSyncError):
    """Raised when no item was created for the resource being synchronized."""

    def __init__(self, external_id: str, destination: str):
        super().__init__(
            f"Failed to create item for resource '{external_id}' at {destination}"
        )
        self.external_id = external_id
        self.destination = destination


class ConfigError(ResourceSyncError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class ConfigFileError(ResourceSyncError):
    """Raised when a configuration file cannot be read."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Configuration file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class SettingsError(ResourceSyncError):
    """Raised when required environment settings are missing or invalid."""

    def __init__(self, variable: str, reason: str = "not set"):
        super().__init__(f"Environment variable {variable} is {reason}")
        self.variable = variable
        self.reason = reason
