# vmware_inventory/config/__init__.py
"""
Configuration for inventory collection
"""

from .settings import (
    ConfigManager,
    VCenterConfig,
    OutputConfig,
    CollectionConfig,
    LoggingSettings,
    get_config,
    initialize_config,
    write_default_config
)

__all__ = [
    'ConfigManager',
    'VCenterConfig',
    'OutputConfig',
    'CollectionConfig',
    'LoggingSettings',
    'get_config',
    'initialize_config',
    'write_default_config'
]
