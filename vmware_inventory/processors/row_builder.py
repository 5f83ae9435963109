# vmware_inventory/processors/row_builder.py
"""
Inventory Row Builder
Merges host hardware, resolved identity and vSAN facts into one flat record per host.
"""

from typing import List

from .base_processor import BaseProcessor
from ..models import HostRecord, HostIdentity, StorageFacts, InventoryRow
from ..utils.units import bytes_to_gib, cores_per_socket


class InventoryRowBuilder(BaseProcessor):
    """
    Builds InventoryRow records.

    Every source field is optional; missing substructures render as empty
    strings or zeros instead of failing the row.
    """

    def get_section_name(self) -> str:
        return "inventory_rows"

    def process(self, hosts: List[HostRecord], identities: List[HostIdentity],
                storage: List[StorageFacts]) -> List[InventoryRow]:
        """
        Build rows for all hosts

        Args:
            hosts: Hosts in host-list order
            identities: Identity per host, same order
            storage: StorageFacts per host, same order

        Returns:
            One InventoryRow per host, in host-list order
        """
        if not len(hosts) == len(identities) == len(storage):
            raise ValueError(
                f"Section length mismatch: {len(hosts)} hosts, "
                f"{len(identities)} identities, {len(storage)} storage facts"
            )

        self.log_start(len(hosts))

        rows = [
            self.build(host, identity, facts)
            for host, identity, facts in zip(hosts, identities, storage)
        ]

        self.log_end(len(rows))
        return rows

    def build(self, host: HostRecord, identity: HostIdentity, facts: StorageFacts) -> InventoryRow:
        """Build the row for a single host"""
        hardware = host.hardware

        cpu_model = ''
        sockets = total_cores = memory_gb = 0
        if hardware is not None:
            if hardware.cpu_packages:
                cpu_model = hardware.cpu_packages[0] or ''
            sockets = hardware.num_cpu_packages or 0
            total_cores = hardware.num_cpu_cores or 0
            memory_gb = bytes_to_gib(hardware.memory_size)

        if sockets == 0 and hardware is not None:
            self.logger.debug(f"{identity.hostname}: no CPU packages reported")

        return InventoryRow(
            hostname=identity.hostname,
            cluster=identity.cluster,
            server_model=host.model or '',
            esxi_version=host.product_version or '',
            cpu_model=cpu_model,
            socket_count=sockets,
            cores_per_socket=cores_per_socket(total_cores, sockets),
            total_cores=total_cores,
            memory_gb=memory_gb,
            vsan_type=facts.architecture,
            vsan_capacity_disks=facts.capacity_disks,
            vsan_cache_disks=facts.cache_disks,
            vsan_capacity_tib=facts.capacity_tib
        )
