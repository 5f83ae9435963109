# vmware_inventory/connectors/base_connector.py
"""
Connector interface consumed by the inventory engine.
The engine only sees translated records, never SDK objects.
"""

from abc import ABC, abstractmethod
from typing import List

from ..exceptions import VCenterConnectionError
from ..models import HostRecord, ManagedRef, VsanConfig, VsanDisk


class InventoryConnector(ABC):
    """
    Abstract access to a virtualization management server.

    Implementations raise VCenterConnectionError for session level failures
    and PropertyRetrievalError when a single lookup fails.
    """

    @abstractmethod
    def connect(self) -> bool:
        pass

    @abstractmethod
    def disconnect(self):
        pass

    @abstractmethod
    def retrieve_hosts(self) -> List[HostRecord]:
        """Enumerate all hosts with summary, hardware, parent and vSAN references"""
        pass

    @abstractmethod
    def retrieve_name(self, ref: ManagedRef) -> str:
        """Fetch the display name of a managed entity"""
        pass

    @abstractmethod
    def retrieve_vsan_config(self, ref: ManagedRef) -> VsanConfig:
        """Fetch the configuration of a host vSAN system"""
        pass

    @abstractmethod
    def query_vsan_disks(self, ref: ManagedRef) -> List[VsanDisk]:
        """List the disks visible to a host vSAN system"""
        pass

    def __enter__(self):
        """Context manager entry"""
        if self.connect():
            return self
        raise VCenterConnectionError(f"Failed to connect using {self.__class__.__name__}")

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.disconnect()
