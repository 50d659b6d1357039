"""Environment settings for the resource repository.

Settings are read from environment variables, with a .env file loaded
through python-dotenv first. The environment names the YAML configuration
file and may override a few of its values per deployment.
"""

import os
from dataclasses import replace
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .config_loader import ConfigLoader
from .errors import ConfigError, SettingsError
from .models import RepositoryConfig


class Settings(NamedTuple):
    """Resource repository settings taken from the environment."""
    config_path: str
    repository_path: Optional[str] = None
    content_write_policy: Optional[str] = None


class EnvironmentSettings:
    """Loads and validates resource repository settings from the environment.

    Required environment variables:
        RESOURCE_SYNC_CONFIG: Path to the YAML configuration file

    Optional environment variables:
        RESOURCE_SYNC_REPOSITORY_PATH: Overrides repository_path
        RESOURCE_SYNC_CONTENT_WRITE_POLICY: Overrides content_write_policy

    Example:
        >>> settings = EnvironmentSettings()
        >>> config = settings.load_config()
        >>> print(f"Repository at {config.repository_path}")
    """

    def __init__(self):
        """Initialize by loading environment variables from a .env file."""
        load_dotenv()

    def get_settings(self) -> Settings:
        """Read settings from environment variables.

        Raises:
            SettingsError: If RESOURCE_SYNC_CONFIG is missing
        """
        config_path = os.getenv('RESOURCE_SYNC_CONFIG')
        if not config_path:
            raise SettingsError('RESOURCE_SYNC_CONFIG')

        return Settings(
            config_path=config_path,
            repository_path=os.getenv('RESOURCE_SYNC_REPOSITORY_PATH') or None,
            content_write_policy=os.getenv('RESOURCE_SYNC_CONTENT_WRITE_POLICY') or None,
        )

    def load_config(self) -> RepositoryConfig:
        """Load the configured YAML file and apply environment overrides.

        Raises:
            SettingsError: If RESOURCE_SYNC_CONFIG is missing or an override is invalid
            ConfigFileError: If the configuration file cannot be read
            ConfigError: If the configuration is invalid
        """
        settings = self.get_settings()
        config = ConfigLoader.load(settings.config_path)

        if settings.repository_path:
            if not settings.repository_path.startswith('/'):
                raise SettingsError(
                    'RESOURCE_SYNC_REPOSITORY_PATH', 'not an absolute tree path'
                )
            config = replace(config, repository_path=settings.repository_path)

        if settings.content_write_policy:
            try:
                policy = ConfigLoader.parse_policy(settings.content_write_policy)
            except ConfigError as e:
                raise SettingsError('RESOURCE_SYNC_CONTENT_WRITE_POLICY', 'invalid') from e
            config = replace(config, content_write_policy=policy)

        return config
