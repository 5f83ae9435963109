# vmware_inventory/collectors/__init__.py
"""
Collectors for vCenter host inventory
"""

from .base_collector import BaseCollector, CollectionResult
from .inventory_collector import InventoryCollector

__all__ = ['BaseCollector', 'CollectionResult', 'InventoryCollector']
