"""
Shared fixtures: an in-memory connector and host/disk factories.
"""

from typing import Dict, List, Optional

import pytest

from vmware_inventory.connectors.base_connector import InventoryConnector
from vmware_inventory.exceptions import PropertyRetrievalError, VCenterConnectionError
from vmware_inventory.models import (
    HostRecord,
    HostHardware,
    ManagedRef,
    VsanConfig,
    DiskMapping,
    VsanDisk
)

TB_BLOCKS = 1953125000  # 512-byte blocks in 1 TB (10^12 bytes)


class FakeConnector(InventoryConnector):
    """In-memory connector recording every lookup"""

    def __init__(self, hosts: List[HostRecord] = None, group_names: Dict[str, str] = None,
                 vsan_configs: Dict[str, VsanConfig] = None, vsan_disks: Dict[str, List[VsanDisk]] = None,
                 connect_ok: bool = True):
        self.hosts = hosts or []
        self.group_names = group_names or {}
        self.vsan_configs = vsan_configs or {}
        self.vsan_disks = vsan_disks or {}
        self.connect_ok = connect_ok

        self.failing_groups = set()
        self.failing_configs = set()
        self.failing_disk_queries = set()
        self.fail_host_listing = False

        self.connected = False
        self.disconnect_calls = 0
        self.name_lookups: List[str] = []
        self.config_lookups: List[str] = []
        self.disk_queries: List[str] = []

    def connect(self) -> bool:
        self.connected = self.connect_ok
        return self.connect_ok

    def disconnect(self):
        self.connected = False
        self.disconnect_calls += 1

    def retrieve_hosts(self) -> List[HostRecord]:
        if self.fail_host_listing:
            raise VCenterConnectionError("Error retrieving hosts")
        return list(self.hosts)

    def retrieve_name(self, ref: ManagedRef) -> str:
        self.name_lookups.append(ref.value)
        if ref.value in self.failing_groups:
            raise PropertyRetrievalError(f"Could not retrieve name of {ref}", ref=ref)
        return self.group_names[ref.value]

    def retrieve_vsan_config(self, ref: ManagedRef) -> VsanConfig:
        self.config_lookups.append(ref.value)
        if ref.value in self.failing_configs:
            raise PropertyRetrievalError(f"Could not retrieve vSAN config of {ref}", ref=ref)
        return self.vsan_configs[ref.value]

    def query_vsan_disks(self, ref: ManagedRef) -> List[VsanDisk]:
        self.disk_queries.append(ref.value)
        if ref.value in self.failing_disk_queries:
            raise PropertyRetrievalError(f"Could not query vSAN disks of {ref}", ref=ref)
        return self.vsan_disks.get(ref.value, [])


def make_host(index: int, name: str = None, parent: Optional[str] = None, vsan: Optional[str] = None,
              sockets: int = 2, cores: int = 32, memory: int = 137438953472,
              model: Optional[str] = 'PowerEdge R750', version: Optional[str] = '8.0.2',
              cpu: str = 'Intel(R) Xeon(R) Gold 6338 CPU @ 2.00GHz', hardware: bool = True) -> HostRecord:
    """Build a HostRecord with sensible defaults"""
    return HostRecord(
        ref=ManagedRef('HostSystem', f'host-{index}'),
        name=name or f'esx{index:02d}.lab.local',
        model=model,
        product_version=version,
        hardware=HostHardware(
            cpu_packages=[cpu] * sockets,
            num_cpu_packages=sockets,
            num_cpu_cores=cores,
            memory_size=memory
        ) if hardware else None,
        parent=ManagedRef('ClusterComputeResource', parent) if parent else None,
        vsan_system=ManagedRef('HostVsanSystem', vsan) if vsan else None
    )


def make_disk(name: str, blocks: int = TB_BLOCKS, block_size: int = 512, in_vsan: bool = True) -> VsanDisk:
    return VsanDisk(name=name, block_size=block_size, block=blocks, in_vsan=in_vsan)


def make_disk_group(cache: str, capacity_count: int, blocks: int = TB_BLOCKS) -> DiskMapping:
    return DiskMapping(
        ssd=make_disk(cache, blocks=blocks // 2),
        non_ssd=[make_disk(f'{cache}-cap{i}', blocks=blocks) for i in range(capacity_count)]
    )


@pytest.fixture
def connector():
    """Empty fake connector, tests populate it"""
    return FakeConnector()
