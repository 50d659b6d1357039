"""Test fixtures for resource sync tests.

This module provides sample resources, MIME mappings and configuration
content shared by unit and integration tests.
"""

from .sample_resources import (
    FIXED_NOW,
    REPOSITORY_PATH,
    SAMPLE_MIME_TYPES,
    SAMPLE_CONFIG_YAML,
    make_resource,
    payload,
)

__all__ = [
    'FIXED_NOW',
    'REPOSITORY_PATH',
    'SAMPLE_MIME_TYPES',
    'SAMPLE_CONFIG_YAML',
    'make_resource',
    'payload',
]
