# vmware_inventory/collectors/sub_collectors/storage_topology.py
"""
Storage Topology Aggregator
Determines the vSAN architecture of each host (OSA disk groups or ESA storage
pool) and aggregates disk counts and raw capacity.
"""

import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import asdict
from typing import List, Optional

from .base_sub_collector import SubCollector
from ...exceptions import PropertyRetrievalError
from ...models import (
    HostRecord,
    VsanConfig,
    VsanArchitecture,
    StorageFacts,
    DiskGroupSummary
)


class StorageTopologyAggregator(SubCollector):
    """
    Aggregates vSAN storage facts per host.

    Hosts are independent of each other; with parallel enabled they are
    processed on a thread pool and reassembled in host-list order.
    Lookup failures degrade the affected host and never abort the run.
    """

    def __init__(self, connector, system_name: str, parallel: bool = False,
                 max_workers: int = 4, debug_dump: bool = False):
        super().__init__(connector, system_name)
        self.parallel = parallel
        self.max_workers = max_workers
        self.debug_dump = debug_dump

    def get_section_name(self) -> str:
        return "vsan"

    def collect(self, hosts: List[HostRecord]) -> List[StorageFacts]:
        """
        Aggregate storage facts for all hosts

        Args:
            hosts: Hosts in host-list order

        Returns:
            One StorageFacts per host, in the same order
        """
        self.log_start(len(hosts))

        if self.parallel and len(hosts) > 1:
            facts = self._collect_parallel(hosts)
        else:
            facts = [self.aggregate(host) for host in hosts]

        vsan_hosts = sum(1 for f in facts if f.architecture is not VsanArchitecture.NONE)
        self.log_end(vsan_hosts)
        return facts

    def _collect_parallel(self, hosts: List[HostRecord]) -> List[StorageFacts]:
        """Aggregate on a thread pool, collecting results by host index"""
        self.logger.info(f"Aggregating vSAN facts for {len(hosts)} hosts with {self.max_workers} workers")

        results: List[Optional[StorageFacts]] = [None] * len(hosts)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self.aggregate, host): index
                for index, host in enumerate(hosts)
            }

            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()

        return results

    def aggregate(self, host: HostRecord) -> StorageFacts:
        """
        Compute StorageFacts for a single host.

        Returns:
            StorageFacts; architecture NONE when the host has no vSAN system,
            its configuration cannot be fetched, or an OSA host has no disk groups
        """
        if host.vsan_system is None:
            return StorageFacts.none()

        try:
            config = self.connector.retrieve_vsan_config(host.vsan_system)
        except PropertyRetrievalError as e:
            self.logger.warning(f"Could not retrieve vSAN config for {host.name}: {e}")
            return StorageFacts.none()

        if self.debug_dump:
            self._dump(f"vSAN system for {host.name}", asdict(config))

        if config.is_esa:
            return self._aggregate_esa(host)
        return self._aggregate_osa(host, config)

    def _aggregate_esa(self, host: HostRecord) -> StorageFacts:
        """ESA: no disk groups, every claimed disk is a capacity disk"""
        try:
            disks = self.connector.query_vsan_disks(host.vsan_system)
        except PropertyRetrievalError as e:
            self.logger.warning(f"Could not query vSAN disks for {host.name}: {e}")
            return StorageFacts(architecture=VsanArchitecture.ESA)

        if self.debug_dump:
            self._dump(f"vSAN disks for {host.name}", [asdict(disk) for disk in disks])

        capacity_disks = 0
        capacity_bytes = 0
        unclaimed = 0
        for disk in disks:
            if not disk.in_vsan:
                unclaimed += 1
                continue
            capacity_disks += 1
            capacity_bytes += disk.capacity_bytes

        self.logger.debug(f"{host.name}: ESA with {capacity_disks} disks in use, {unclaimed} unclaimed")

        return StorageFacts(
            architecture=VsanArchitecture.ESA,
            capacity_disks=capacity_disks,
            cache_disks=0,
            capacity_bytes=capacity_bytes,
            unclaimed_disks=unclaimed
        )

    def _aggregate_osa(self, host: HostRecord, config: VsanConfig) -> StorageFacts:
        """OSA: one cache SSD per disk group plus its capacity disks"""
        if not config.disk_mappings:
            self.logger.debug(f"{host.name}: vSAN system without disk groups")
            return StorageFacts.none()

        groups = []
        for mapping in config.disk_mappings:
            groups.append(DiskGroupSummary(
                cache_disk=mapping.ssd.name if mapping.ssd is not None else '',
                capacity_disks=len(mapping.non_ssd),
                capacity_bytes=sum(disk.capacity_bytes for disk in mapping.non_ssd)
            ))

        self.logger.debug(f"{host.name}: OSA with {len(groups)} disk groups")

        return StorageFacts(
            architecture=VsanArchitecture.OSA,
            capacity_disks=sum(group.capacity_disks for group in groups),
            cache_disks=len(groups),
            capacity_bytes=sum(group.capacity_bytes for group in groups),
            disk_groups=tuple(groups)
        )

    def _dump(self, title: str, data):
        self.logger.debug(f"=== {title} ===\n{json.dumps(data, indent=2, default=str)}")
