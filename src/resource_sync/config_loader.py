"""YAML configuration loading and validation.

This module loads the resource repository configuration: where the
repository root lives, which templates to create items from, how items are
bucketed and how MIME types map to storage extensions.
"""

from typing import Any, Dict

import yaml

from src.media.errors import InvalidMimeMappingError
from src.media.mime_registry import MimeRegistry

from .errors import ConfigError, ConfigFileError
from .models import ContentWritePolicy, RepositoryConfig


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure:
        repository_path: /sitecore/media library/Commerce/Resources
        repository_template_id: resource-repository
        folder_template_id: common/folder
        bucket_folder_template_id: common/bucket-folder
        media_template_id: system/media/unversioned/file
        bucket_depth: 3
        default_image_extension: jpg
        created_by: resource-sync
        content_write_policy: log
        mime_types:
          image/png: [png, jpg]
          image/*: "*"
    """

    # Required top-level config fields
    REQUIRED_FIELDS = {'repository_path', 'repository_template_id'}

    # Optional string fields and their defaults
    STRING_DEFAULTS = {
        'folder_template_id': 'common/folder',
        'bucket_folder_template_id': 'common/bucket-folder',
        'media_template_id': 'system/media/unversioned/file',
        'default_image_extension': 'jpg',
        'created_by': 'resource-sync',
    }

    DEFAULT_BUCKET_DEPTH = 3
    MAX_BUCKET_DEPTH = 8

    @classmethod
    def load(cls, config_path: str) -> RepositoryConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            RepositoryConfig with parsed configuration

        Raises:
            ConfigFileError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigFileError(config_path, 'read', 'Configuration file not found')
        except PermissionError:
            raise ConfigFileError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise ConfigFileError(config_path, 'read', str(e))

        return cls.loads(content)

    @classmethod
    def loads(cls, content: str) -> RepositoryConfig:
        """Parse configuration from a YAML string."""
        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def build_registry(cls, config: RepositoryConfig) -> MimeRegistry:
        """Build the MIME registry described by a configuration."""
        try:
            return MimeRegistry(config.mime_types)
        except InvalidMimeMappingError as e:
            raise ConfigError(str(e), 'mime_types')

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> RepositoryConfig:
        missing_fields = cls.REQUIRED_FIELDS - set(config_dict.keys())
        if missing_fields:
            raise ConfigError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}"
            )

        repository_path = cls._required_string(config_dict, 'repository_path')
        if not repository_path.startswith('/'):
            raise ConfigError(
                f"Field 'repository_path' must be an absolute tree path, got '{repository_path}'",
                'repository_path'
            )
        repository_template_id = cls._required_string(config_dict, 'repository_template_id')

        strings = {}
        for field_name, default in cls.STRING_DEFAULTS.items():
            value = config_dict.get(field_name, default)
            if value is None or not str(value).strip():
                raise ConfigError(f"Field '{field_name}' cannot be empty", field_name)
            strings[field_name] = str(value).strip()

        bucket_depth = config_dict.get('bucket_depth', cls.DEFAULT_BUCKET_DEPTH)
        if isinstance(bucket_depth, bool):
            raise ConfigError("Field 'bucket_depth' must be an integer", 'bucket_depth')
        try:
            bucket_depth = int(bucket_depth)
        except (ValueError, TypeError):
            raise ConfigError(
                f"Field 'bucket_depth' must be an integer, got {bucket_depth!r}",
                'bucket_depth'
            )
        if not 0 <= bucket_depth <= cls.MAX_BUCKET_DEPTH:
            raise ConfigError(
                f"Field 'bucket_depth' must be between 0 and {cls.MAX_BUCKET_DEPTH}, got {bucket_depth}",
                'bucket_depth'
            )

        content_write_policy = cls.parse_policy(
            config_dict.get('content_write_policy', ContentWritePolicy.LOG.value)
        )

        mime_types = config_dict.get('mime_types') or {}
        if not isinstance(mime_types, dict):
            raise ConfigError("Field 'mime_types' must be a mapping", 'mime_types')

        config = RepositoryConfig(
            repository_path=repository_path,
            repository_template_id=repository_template_id,
            folder_template_id=strings['folder_template_id'],
            bucket_folder_template_id=strings['bucket_folder_template_id'],
            media_template_id=strings['media_template_id'],
            bucket_depth=bucket_depth,
            default_image_extension=strings['default_image_extension'].lstrip('.'),
            created_by=strings['created_by'],
            content_write_policy=content_write_policy,
            mime_types={str(key): value for key, value in mime_types.items()},
        )

        # Fail on bad mappings at load time rather than on first save
        cls.build_registry(config)
        return config

    @staticmethod
    def parse_policy(value: Any) -> ContentWritePolicy:
        """Parse a content write policy name ('log' or 'raise')."""
        try:
            return ContentWritePolicy(str(value).strip().lower())
        except ValueError:
            choices = ', '.join(policy.value for policy in ContentWritePolicy)
            raise ConfigError(
                f"Field 'content_write_policy' must be one of: {choices}, got {value!r}",
                'content_write_policy'
            )

    @staticmethod
    def _required_string(config_dict: Dict[str, Any], field_name: str) -> str:
        value = config_dict.get(field_name)
        if value is None or not str(value).strip():
            raise ConfigError(f"Field '{field_name}' cannot be empty", field_name)
        return str(value).strip()
