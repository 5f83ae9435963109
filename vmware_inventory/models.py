# vmware_inventory/models.py
"""
Data model for the inventory engine.

Input records (HostRecord and the vSAN structures) are produced by a connector
and never mutated. StorageFacts and InventoryRow are produced by the engine.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple

from .utils.units import bytes_to_tib, disk_capacity_bytes, format_tib

INVENTORY_HEADERS = [
    'Hostname',
    'Cluster',
    'Server Model',
    'ESXi Version',
    'CPU Model',
    'Socket Count',
    'Cores per Socket',
    'Total Cores',
    'Memory GB',
    'vSAN Type',
    'vSAN Capacity Disks',
    'vSAN Cache Disks',
    'vSAN Capacity TiB',
]


@dataclass(frozen=True)
class ManagedRef:
    """Reference to a managed object on the vCenter server"""
    type: str
    value: str

    def __str__(self) -> str:
        return f"{self.type}:{self.value}"


@dataclass
class HostHardware:
    """Detailed hardware of a host"""
    cpu_packages: List[str] = field(default_factory=list)  # package descriptions
    num_cpu_packages: int = 0
    num_cpu_cores: int = 0
    memory_size: int = 0  # bytes


@dataclass
class HostRecord:
    """A host as returned by the host enumeration"""
    ref: ManagedRef
    name: str = ''
    model: Optional[str] = None  # None when summary.hardware is absent
    product_version: Optional[str] = None  # None when summary.config.product is absent
    hardware: Optional[HostHardware] = None
    parent: Optional[ManagedRef] = None
    vsan_system: Optional[ManagedRef] = None


@dataclass
class VsanDisk:
    """A physical disk as seen by the vSAN system"""
    name: str = ''
    block_size: int = 0
    block: int = 0
    in_vsan: bool = False  # vsanDiskInfo populated

    @property
    def capacity_bytes(self) -> int:
        return disk_capacity_bytes(self.block_size, self.block)


@dataclass
class DiskMapping:
    """An OSA disk group: one cache SSD and its capacity disks"""
    ssd: Optional[VsanDisk] = None
    non_ssd: List[VsanDisk] = field(default_factory=list)


@dataclass
class VsanConfig:
    """Translated vSAN host configuration"""
    enabled: Optional[bool] = None
    esa_enabled: Optional[bool] = None
    disk_mappings: Optional[List[DiskMapping]] = None  # None when storageInfo is absent

    @property
    def is_esa(self) -> bool:
        return self.esa_enabled is True


class VsanArchitecture(Enum):
    """vSAN disk architecture of a host"""
    NONE = ''
    OSA = 'OSA'  # disk groups: one cache disk + capacity disks
    ESA = 'ESA'  # single-tier storage pool


@dataclass(frozen=True)
class DiskGroupSummary:
    cache_disk: str
    capacity_disks: int
    capacity_bytes: int


@dataclass(frozen=True)
class StorageFacts:
    """
    Aggregated vSAN storage facts for a single host.

    The payload fields are per architecture: disk_groups is only populated
    for OSA, unclaimed_disks only for ESA.
    """
    architecture: VsanArchitecture = VsanArchitecture.NONE
    capacity_disks: int = 0
    cache_disks: int = 0
    capacity_bytes: int = 0
    disk_groups: Tuple[DiskGroupSummary, ...] = ()
    unclaimed_disks: int = 0

    @classmethod
    def none(cls) -> 'StorageFacts':
        return cls()

    @property
    def capacity_tib(self) -> float:
        return bytes_to_tib(self.capacity_bytes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['architecture'] = self.architecture.value
        data['capacity_tib'] = self.capacity_tib
        return data


@dataclass(frozen=True)
class HostIdentity:
    """Display identity of a host after group resolution and anonymization"""
    hostname: str
    cluster: str = ''


@dataclass(frozen=True)
class InventoryRow:
    """One flattened output record per host"""
    hostname: str = ''
    cluster: str = ''
    server_model: str = ''
    esxi_version: str = ''
    cpu_model: str = ''
    socket_count: int = 0
    cores_per_socket: int = 0
    total_cores: int = 0
    memory_gb: int = 0
    vsan_type: VsanArchitecture = VsanArchitecture.NONE
    vsan_capacity_disks: int = 0
    vsan_cache_disks: int = 0
    vsan_capacity_tib: float = 0.0

    def as_record(self) -> List[str]:
        """Render the row as strings in INVENTORY_HEADERS order"""
        return [
            self.hostname,
            self.cluster,
            self.server_model,
            self.esxi_version,
            self.cpu_model,
            str(self.socket_count),
            str(self.cores_per_socket),
            str(self.total_cores),
            str(self.memory_gb),
            self.vsan_type.value,
            str(self.vsan_capacity_disks),
            str(self.vsan_cache_disks),
            format_tib(self.vsan_capacity_tib),
        ]

    def to_dict(self, headers: List[str] = None) -> Dict[str, str]:
        """Rendered values keyed by column header"""
        return dict(zip(headers or INVENTORY_HEADERS, self.as_record()))
