"""
Configuration management for selection sync
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml


@dataclass
class StorageConfig:
    """Durable store configuration"""
    backend: str = "sqlite"
    db_path: str = "selection.db"
    current_assistant_key: str = "currentAssistant"


@dataclass
class ProvisioningConfig:
    """Default assistant and topic templates"""
    default_topic_name: str = "New Topic"
    default_assistants: List[Dict[str, Any]] = field(default_factory=lambda: [
        {
            "name": "Default Assistant",
            "description": "General purpose assistant",
        },
    ])


@dataclass
class SyncConfig:
    """Reconciliation driver configuration"""
    check_permissions: bool = True
    workspace_dir: str = "workspace"


@dataclass
class LoggingConfig:
    """Log level for stderr and the debug log file (null disables the file)"""
    level: str = "INFO"
    file: Optional[str] = "selection_sync.log"


@dataclass
class Config:
    """Main configuration class for selection sync"""
    storage: StorageConfig = field(default_factory=StorageConfig)
    provisioning: ProvisioningConfig = field(default_factory=ProvisioningConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    _instance: Optional["Config"] = field(default=None, init=False, repr=False)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML file or use defaults.

        Args:
            config_path: Path to config file. Defaults to config.yaml in the working directory.

        Returns:
            Config instance with loaded or default settings.
        """
        if config_path is None:
            config_path = Path("config.yaml")

        if not config_path.exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        if "storage" in data:
            storage_data = data["storage"]
            for key in ["backend", "db_path", "current_assistant_key"]:
                if key in storage_data:
                    setattr(config.storage, key, storage_data[key])

        if "provisioning" in data:
            prov_data = data["provisioning"]
            if "default_topic_name" in prov_data:
                config.provisioning.default_topic_name = prov_data["default_topic_name"]
            if "default_assistants" in prov_data:
                config.provisioning.default_assistants = prov_data["default_assistants"] or []

        if "sync" in data:
            sync_data = data["sync"]
            for key in ["check_permissions", "workspace_dir"]:
                if key in sync_data:
                    setattr(config.sync, key, sync_data[key])

        if "logging" in data:
            logging_data = data["logging"]
            for key in ["level", "file"]:
                if key in logging_data:
                    setattr(config.logging, key, logging_data[key])

        return config

    @classmethod
    def get_instance(cls, config_path: Optional[Path] = None) -> "Config":
        """Get singleton instance of Config.

        Args:
            config_path: Path to config file (only used on first call).

        Returns:
            Singleton Config instance.
        """
        if cls._instance is None:
            cls._instance = cls.load(config_path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton instance (useful for testing)."""
        cls._instance = None


def get_config(config_path: Optional[Path] = None) -> Config:
    """Convenience function to get config singleton."""
    return Config.get_instance(config_path)
