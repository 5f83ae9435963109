# vmware_inventory/collectors/sub_collectors/base_sub_collector.py
"""
Base class for sub-collectors.
Sub-collectors gather one aspect of the inventory (group identities, vSAN topology)
through an already-connected connector.
"""

from abc import ABC, abstractmethod
from typing import Any
import logging


class SubCollector(ABC):
    """
    Abstract base class for all sub-collectors.

    Sub-collectors:
    - Don't manage sessions (receive a connected InventoryConnector)
    - Return typed results rather than CollectionResult objects
    - Handle per-entity lookup failures themselves and degrade to defaults
    - Are orchestrated by InventoryCollector
    """

    def __init__(self, connector, system_name: str):
        """
        Initialize sub-collector

        Args:
            connector: Already-connected InventoryConnector instance
            system_name: Name of the vCenter being collected from
        """
        self.connector = connector
        self.system_name = system_name
        self.logger = logging.getLogger(f"subcollector.{self.__class__.__name__}")

    @abstractmethod
    def collect(self, hosts) -> Any:
        """
        Collect this sub-collector's data for the given hosts.

        Args:
            hosts: List of HostRecord in host-list order
        """
        pass

    @abstractmethod
    def get_section_name(self) -> str:
        """Name of the data section this sub-collector produces"""
        pass

    def log_start(self, item_count: int = None):
        """Log the start of collection"""
        if item_count is not None:
            self.logger.info(f"Starting {self.get_section_name()} collection for {item_count} hosts on {self.system_name}")
        else:
            self.logger.info(f"Starting {self.get_section_name()} collection for {self.system_name}")

    def log_end(self, item_count: int = None):
        """Log the end of collection"""
        if item_count is not None:
            self.logger.info(f"Completed {self.get_section_name()} collection: {item_count} items")
        else:
            self.logger.info(f"Completed {self.get_section_name()} collection")
