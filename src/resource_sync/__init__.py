"""Resource synchronization library.

This package reconciles external resource records (id, name, MIME type and
payload) with media items in a content tree: it creates or updates one item
per external id and files it in a deterministic bucket below a repository
root.
"""

from .bootstrap import RepositoryBootstrap
from .config_loader import ConfigLoader
from .errors import (
    ResourceSyncError,
    BootstrapError,
    ContentWriteError,
    ItemCreationError,
    ConfigError,
    ConfigFileError,
    SettingsError,
)
from .item_locator import ItemLocator
from .key_resolver import EntityKeyResolver
from .models import (
    ContentWritePolicy,
    ExternalResource,
    PlacementTarget,
    RepositoryConfig,
    UpsertResult,
    UpsertState,
)
from .placement_planner import PlacementPlanner
from .repository import ResourceRepository
from .settings import EnvironmentSettings, Settings
from .upsert_engine import UpsertEngine

__all__ = [
    'RepositoryBootstrap',
    'ConfigLoader',
    'ResourceSyncError',
    'BootstrapError',
    'ContentWriteError',
    'ItemCreationError',
    'ConfigError',
    'ConfigFileError',
    'SettingsError',
    'ItemLocator',
    'EntityKeyResolver',
    'ContentWritePolicy',
    'ExternalResource',
    'PlacementTarget',
    'RepositoryConfig',
    'UpsertResult',
    'UpsertState',
    'PlacementPlanner',
    'ResourceRepository',
    'EnvironmentSettings',
    'Settings',
    'UpsertEngine',
]
