"""Unit tests for resource_sync.errors module."""

import pytest

from src.item_store.errors import SyncError
from src.resource_sync.errors import (
    ResourceSyncError,
    BootstrapError,
    ContentWriteError,
    ItemCreationError,
    ConfigError,
    ConfigFileError,
    SettingsError,
)


class TestResourceSyncError:
    """Test cases for ResourceSyncError base exception."""

    def test_inherits_from_sync_error(self):
        """ResourceSyncError should inherit from SyncError."""
        assert issubclass(ResourceSyncError, SyncError)

    def test_message_is_preserved(self):
        """ResourceSyncError preserves the error message."""
        with pytest.raises(ResourceSyncError) as exc_info:
            raise ResourceSyncError("custom message")
        assert str(exc_info.value) == "custom message"

    @pytest.mark.parametrize("error_class", [
        BootstrapError,
        ContentWriteError,
        ItemCreationError,
        ConfigError,
        ConfigFileError,
        SettingsError,
    ])
    def test_subclasses(self, error_class):
        """Every resource sync error derives from ResourceSyncError."""
        assert issubclass(error_class, ResourceSyncError)


class TestBootstrapError:
    """Test cases for BootstrapError."""

    def test_message_with_reason(self):
        """BootstrapError should include path and reason."""
        error = BootstrapError("/sitecore/media/Resources", "parent missing")
        assert "/sitecore/media/Resources" in str(error)
        assert "parent missing" in str(error)
        assert error.path == "/sitecore/media/Resources"
        assert error.reason == "parent missing"

    def test_message_without_reason(self):
        """BootstrapError works without a reason."""
        error = BootstrapError("/sitecore/media/Resources")
        assert str(error).endswith("/sitecore/media/Resources")


class TestContentWriteError:
    """Test cases for ContentWriteError."""

    def test_stores_context(self):
        """ContentWriteError carries what is needed for remediation."""
        error = ContentWriteError("ext-1", "Logo", "disk full", item_id="abc", created=True)
        assert "ext-1" in str(error)
        assert "Logo" in str(error)
        assert "disk full" in str(error)
        assert error.item_id == "abc"
        assert error.created is True

    def test_defaults(self):
        """item_id and created default to unknown and False."""
        error = ContentWriteError("ext-1", "Logo")
        assert error.item_id is None
        assert error.created is False


class TestConfigErrors:
    """Test cases for configuration errors."""

    def test_config_error_with_field(self):
        """ConfigError should name the offending field."""
        error = ConfigError("must be an integer", "bucket_depth")
        assert str(error) == "Configuration error in field 'bucket_depth': must be an integer"
        assert error.config_field == "bucket_depth"
        assert error.original_message == "must be an integer"

    def test_config_error_without_field(self):
        """ConfigError without a field uses the generic prefix."""
        assert str(ConfigError("empty")) == "Configuration error: empty"

    def test_config_file_error(self):
        """ConfigFileError should store path, operation and reason."""
        error = ConfigFileError("/etc/resources.yaml", "read", "Permission denied")
        assert "/etc/resources.yaml" in str(error)
        assert error.operation == "read"
        assert error.reason == "Permission denied"

    def test_settings_error(self):
        """SettingsError should name the variable."""
        error = SettingsError("RESOURCE_SYNC_CONFIG")
        assert str(error) == "Environment variable RESOURCE_SYNC_CONFIG is not set"
