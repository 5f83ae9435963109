# vmware_inventory/utils/__init__.py
"""
Utility modules for unit conversion and logging
"""

from .units import (
    BYTES_PER_GIB,
    BYTES_PER_TIB,
    disk_capacity_bytes,
    bytes_to_gib,
    bytes_to_tib,
    cores_per_socket,
    format_tib
)
from .logging_config import LoggingConfig, setup_logging, get_logger

__all__ = [
    'BYTES_PER_GIB',
    'BYTES_PER_TIB',
    'disk_capacity_bytes',
    'bytes_to_gib',
    'bytes_to_tib',
    'cores_per_socket',
    'format_tib',
    'LoggingConfig',
    'setup_logging',
    'get_logger'
]
