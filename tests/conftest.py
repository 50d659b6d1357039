"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration) and provides the
shared store, configuration and repository fixtures.
"""

import logging

import pytest

from src.item_store.store import InMemoryItemStore
from src.resource_sync.models import ContentWritePolicy, RepositoryConfig
from src.resource_sync.repository import ResourceRepository
from tests.fixtures.sample_resources import FIXED_NOW, REPOSITORY_PATH, SAMPLE_MIME_TYPES

# Keep debug transitions out of captured output unless a test asks for them.
logging.getLogger("src").setLevel(logging.INFO)


@pytest.fixture
def store():
    """Empty in-memory item store."""
    return InMemoryItemStore()


@pytest.fixture
def config():
    """Repository configuration with a two-level bucket layout."""
    return RepositoryConfig(
        repository_path=REPOSITORY_PATH,
        repository_template_id="resource-repository",
        bucket_depth=2,
        default_image_extension="jpg",
        created_by="tests",
        content_write_policy=ContentWritePolicy.LOG,
        mime_types=dict(SAMPLE_MIME_TYPES),
    )


@pytest.fixture
def fixed_clock():
    """Clock returning a constant timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture
def repository(store, config, fixed_clock):
    """ResourceRepository over the in-memory store."""
    return ResourceRepository(store, config, clock=fixed_clock)


@pytest.fixture
def root(repository):
    """Bootstrapped repository root."""
    return repository.ensure_root()
