# vmware_inventory/connectors/__init__.py
"""
Connectors to virtualization management servers
"""

from .base_connector import InventoryConnector

__all__ = ['InventoryConnector']
