# vmware_inventory/config/settings.py
"""
Configuration management for vCenter inventory collection.
Settings come from an optional YAML file and are overridden by command line flags.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict
import logging

SUPPORTED_FORMATS = ('csv', 'json')


@dataclass
class VCenterConfig:
    """Connection settings for the vCenter server"""
    host: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    password_env: Optional[str] = None
    port: int = 443
    insecure: bool = True
    timeout: int = 30

    def __post_init__(self):
        if self.port is not None and not 0 < int(self.port) < 65536:
            raise ValueError(f"Invalid vCenter port: {self.port}")


@dataclass
class OutputConfig:
    """Where and how the inventory is written"""
    path: str = 'hosts_cpu.csv'
    format: str = 'csv'
    anonymize: bool = False

    def __post_init__(self):
        if self.format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported output format '{self.format}', expected one of {SUPPORTED_FORMATS}")


@dataclass
class CollectionConfig:
    """Collection behavior configuration"""
    parallel_storage: bool = False
    max_workers: int = 4
    debug: bool = False
    raw_output_dir: Optional[str] = None

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")


@dataclass
class LoggingSettings:
    """Logging configuration"""
    level: str = 'INFO'
    log_to_file: bool = False
    log_dir: str = 'logs'

    def __post_init__(self):
        if not isinstance(logging.getLevelName(str(self.level).upper()), int):
            raise ValueError(f"Unknown log level '{self.level}'")


class ConfigManager:
    """Loads and validates the inventory configuration"""

    DEFAULT_LOCATIONS = [
        Path('inventory.yml'),
        Path('config/inventory.yml'),
        Path.home() / '.config' / 'vmware-inventory' / 'inventory.yml'
    ]

    def __init__(self, config_file: str = None):
        self.logger = logging.getLogger('config_manager')

        if config_file:
            self.config_file = Path(config_file)
        else:
            self.config_file = self._find_config_file()

        self.vcenter = VCenterConfig()
        self.output = OutputConfig()
        self.collection = CollectionConfig()
        self.logging = LoggingSettings()

        if self.config_file is not None:
            self._load_config()

    def _find_config_file(self) -> Optional[Path]:
        """Find configuration file in standard locations"""
        for location in self.DEFAULT_LOCATIONS:
            if location.exists():
                self.logger.info(f"Found config file at {location}")
                return location

        self.logger.debug("No configuration file found, using defaults")
        return None

    def _load_config(self):
        """Load configuration from file"""
        try:
            with open(self.config_file, 'r') as f:
                config_data = yaml.safe_load(f) or {}

            self.vcenter = VCenterConfig(**config_data.get('vcenter', {}))
            self.output = OutputConfig(**config_data.get('output', {}))
            self.collection = CollectionConfig(**config_data.get('collection', {}))
            self.logging = LoggingSettings(**config_data.get('logging', {}))

            self._resolve_password_env()

            self.logger.info(f"Loaded configuration from {self.config_file}")

        except Exception as e:
            self.logger.debug(f"Failed to load configuration from {self.config_file}: {e}")
            raise

    def _resolve_password_env(self):
        """Substitute the password from the environment when password_env is set"""
        if self.vcenter.password or not self.vcenter.password_env:
            return

        password = os.getenv(self.vcenter.password_env)
        if password:
            self.vcenter.password = password
        else:
            self.logger.warning(f"Environment variable {self.vcenter.password_env} is not set")

    def apply_overrides(self, overrides: Dict[str, Dict[str, Any]]):
        """
        Apply command line overrides on top of file values.

        Args:
            overrides: Mapping of section name -> {field: value}; None values are ignored
        """
        for section_name, values in overrides.items():
            section = getattr(self, section_name)
            for key, value in values.items():
                if value is None:
                    continue
                if not hasattr(section, key):
                    raise ValueError(f"Unknown setting {section_name}.{key}")
                setattr(section, key, value)
            # Re-run dataclass validation
            if hasattr(section, '__post_init__'):
                section.__post_init__()

        self._resolve_password_env()

    def validate_configuration(self) -> bool:
        """Validate the settings required for a collection run"""
        valid = True

        if not self.vcenter.host:
            self.logger.error("No vCenter host configured")
            valid = False

        if not self.vcenter.username:
            self.logger.error("No vCenter username configured")
            valid = False

        if self.output.anonymize and self.collection.debug:
            self.logger.warning("Debug dumps contain real host names even when anonymizing")

        return valid

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'vcenter': asdict(self.vcenter),
            'output': asdict(self.output),
            'collection': asdict(self.collection),
            'logging': asdict(self.logging)
        }
        data['vcenter']['password'] = None
        return data

    def reload_config(self):
        """Reload configuration from file"""
        self.logger.info("Reloading configuration")
        if self.config_file is not None:
            self._load_config()


def write_default_config(config_path: str) -> Path:
    """Write a default configuration file and return its path"""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    default_config = {
        'vcenter': {
            'host': 'vcenter.example.local',
            'username': 'administrator@vsphere.local',
            'password_env': 'VCENTER_PASSWORD',
            'port': 443,
            'insecure': True,
            'timeout': 30
        },
        'output': {
            'path': 'hosts_cpu.csv',
            'format': 'csv',
            'anonymize': False
        },
        'collection': {
            'parallel_storage': False,
            'max_workers': 4,
            'debug': False,
            'raw_output_dir': None
        },
        'logging': {
            'level': 'INFO',
            'log_to_file': False,
            'log_dir': 'logs'
        }
    }

    with open(path, 'w') as f:
        yaml.dump(default_config, f, default_flow_style=False, indent=2, sort_keys=False)

    logging.getLogger('config_manager').info(f"Created default configuration at {path}")
    return path


# Global configuration instance
config_manager = None


def get_config() -> ConfigManager:
    """Get global configuration manager instance"""
    global config_manager
    if config_manager is None:
        config_manager = ConfigManager()
    return config_manager


def initialize_config(config_file: str = None) -> ConfigManager:
    """Initialize configuration manager with specific config file"""
    global config_manager
    config_manager = ConfigManager(config_file)
    return config_manager
