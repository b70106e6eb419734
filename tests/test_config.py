"""
Tests for Config module
"""

import pytest
from selection_sync.config import (
    Config,
    LoggingConfig,
    ProvisioningConfig,
    StorageConfig,
    SyncConfig,
    get_config,
)

from .fixtures import SAMPLE_CONFIG_YAML


class TestStorageConfig:
    """Test StorageConfig dataclass"""

    def test_default_values(self):
        """Test default storage settings"""
        config = StorageConfig()

        assert config.backend == "sqlite"
        assert config.db_path == "selection.db"
        assert config.current_assistant_key == "currentAssistant"


class TestProvisioningConfig:
    """Test ProvisioningConfig dataclass"""

    def test_default_assistant_template(self):
        """Test one default assistant template is provided"""
        config = ProvisioningConfig()

        assert config.default_topic_name == "New Topic"
        assert len(config.default_assistants) == 1
        assert config.default_assistants[0]["name"] == "Default Assistant"

    def test_templates_not_shared(self):
        """Test default template lists are per instance"""
        first = ProvisioningConfig()
        first.default_assistants.append({"name": "Extra"})

        assert len(ProvisioningConfig().default_assistants) == 1


class TestSyncConfig:
    """Test SyncConfig dataclass"""

    def test_default_values(self):
        config = SyncConfig()

        assert config.check_permissions is True
        assert config.workspace_dir == "workspace"


class TestLoggingConfig:
    """Test LoggingConfig dataclass"""

    def test_default_values(self):
        config = LoggingConfig()

        assert config.level == "INFO"
        assert config.file == "selection_sync.log"


class TestConfig:
    """Test Config class"""

    def setup_method(self):
        """Reset singleton before each test"""
        Config.reset_instance()

    def teardown_method(self):
        """Reset singleton after each test"""
        Config.reset_instance()

    def test_default_config(self):
        """Test creating config with defaults"""
        config = Config()

        assert isinstance(config.storage, StorageConfig)
        assert isinstance(config.provisioning, ProvisioningConfig)
        assert isinstance(config.sync, SyncConfig)

    def test_load_nonexistent_file(self, tmp_path):
        """Test loading from non-existent file returns defaults"""
        config = Config.load(tmp_path / "nonexistent.yaml")

        assert config.storage.db_path == "selection.db"

    def test_load_from_yaml(self, tmp_path):
        """Test loading config from YAML file"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(SAMPLE_CONFIG_YAML)

        config = Config.load(config_file)

        assert config.storage.backend == "memory"
        assert config.storage.db_path == "custom.db"
        assert config.storage.current_assistant_key == "lastAssistant"
        assert config.provisioning.default_topic_name == "Fresh Chat"
        assert [a["name"] for a in config.provisioning.default_assistants] == ["Writer", "Coder"]
        assert config.sync.check_permissions is False
        assert config.sync.workspace_dir == "/tmp/ws"
        assert config.logging.level == "WARNING"
        assert config.logging.file is None

    def test_load_partial_yaml(self, tmp_path):
        """Test loading YAML with only some settings"""
        config_file = tmp_path / "partial.yaml"
        config_file.write_text("storage:\n  db_path: other.db\n")

        config = Config.load(config_file)

        assert config.storage.db_path == "other.db"
        assert config.storage.backend == "sqlite"
        assert config.provisioning.default_topic_name == "New Topic"

    def test_load_empty_yaml(self, tmp_path):
        """Test loading empty YAML file returns defaults"""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.storage.current_assistant_key == "currentAssistant"

    def test_null_assistant_templates(self, tmp_path):
        """Test a null template list means no default assistants"""
        config_file = tmp_path / "null.yaml"
        config_file.write_text("provisioning:\n  default_assistants: null\n")

        config = Config.load(config_file)

        assert config.provisioning.default_assistants == []


class TestConfigSingleton:
    """Test Config singleton pattern"""

    def setup_method(self):
        """Reset singleton before each test"""
        Config.reset_instance()

    def teardown_method(self):
        """Reset singleton after each test"""
        Config.reset_instance()

    def test_get_instance_returns_same_object(self):
        """Test get_instance returns same object on multiple calls"""
        assert Config.get_instance() is Config.get_instance()

    def test_get_instance_uses_first_path(self, tmp_path):
        """Test get_instance only uses config_path on first call"""
        config1 = tmp_path / "config1.yaml"
        config1.write_text("storage:\n  db_path: first.db\n")
        config2 = tmp_path / "config2.yaml"
        config2.write_text("storage:\n  db_path: second.db\n")

        instance1 = Config.get_instance(config1)
        instance2 = Config.get_instance(config2)

        assert instance1.storage.db_path == "first.db"
        assert instance2.storage.db_path == "first.db"

    def test_reset_instance(self, tmp_path):
        """Test reset_instance clears the singleton"""
        config1 = tmp_path / "config1.yaml"
        config1.write_text("storage:\n  db_path: first.db\n")
        config2 = tmp_path / "config2.yaml"
        config2.write_text("storage:\n  db_path: second.db\n")

        assert Config.get_instance(config1).storage.db_path == "first.db"
        Config.reset_instance()
        assert Config.get_instance(config2).storage.db_path == "second.db"

    def test_get_config_convenience_function(self):
        """Test get_config convenience function"""
        config = get_config()

        assert isinstance(config, Config)
        assert config is Config.get_instance()


class TestConfigFromDict:
    """Test Config._from_dict() method"""

    def test_from_empty_dict(self):
        config = Config._from_dict({})

        assert config.storage.db_path == "selection.db"

    def test_from_dict_ignores_unknown_keys(self):
        """Test that unknown keys in dict are ignored"""
        data = {
            "unknown_key": "value",
            "storage": {"unknown_storage_key": "value", "backend": "memory"},
        }

        config = Config._from_dict(data)

        assert config.storage.backend == "memory"
        assert not hasattr(config, "unknown_key")
        assert not hasattr(config.storage, "unknown_storage_key")
