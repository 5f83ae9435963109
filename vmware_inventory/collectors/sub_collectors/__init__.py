# vmware_inventory/collectors/sub_collectors/__init__.py
"""
Sub-collectors for the inventory collector.
Each sub-collector is responsible for one aspect of the host inventory.
"""

from .base_sub_collector import SubCollector
from .identity_resolver import IdentityResolver, GroupNameMap, AnonymizedLabelMap
from .storage_topology import StorageTopologyAggregator

__all__ = [
    'SubCollector',
    'IdentityResolver',
    'GroupNameMap',
    'AnonymizedLabelMap',
    'StorageTopologyAggregator'
]
