# vmware_inventory/processors/__init__.py
"""
Processors that turn collected sections into inventory rows.
"""

from .base_processor import BaseProcessor
from .row_builder import InventoryRowBuilder

__all__ = ['BaseProcessor', 'InventoryRowBuilder']
