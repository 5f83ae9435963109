# vmware_inventory/collectors/inventory_collector.py
"""
Inventory Collector
Orchestrates a collection run against one vCenter: enumerate hosts, resolve
identities, aggregate vSAN topology and build one inventory row per host.
"""

from dataclasses import asdict
from pathlib import Path
from typing import Dict, Any, List

from .base_collector import BaseCollector
from .sub_collectors import IdentityResolver, StorageTopologyAggregator
from ..connectors.vcenter_connector import VCenterConnector
from ..models import InventoryRow, VsanArchitecture
from ..processors import InventoryRowBuilder


class InventoryCollector(BaseCollector):
    """
    Collector producing the host inventory of a vCenter server.

    Steps:
    1. Connect to vCenter (fatal on failure)
    2. Enumerate hosts (fatal on failure)
    3. Resolve cluster names, then anonymized labels if requested
    4. Aggregate vSAN facts per host (failures degrade that host only)
    5. Build rows in host-list order
    """

    def __init__(self, name: str, config: Dict, connector=None):
        super().__init__(name, config)

        if connector is None:
            connector = VCenterConnector(
                host=self.host,
                port=self.port,
                username=self.username,
                password=config.get('password'),
                insecure=config.get('insecure', True),
                timeout=self.timeout
            )
        self.connector = connector

        self.anonymize = config.get('anonymize', False)
        self.parallel_storage = config.get('parallel_storage', False)
        self.max_workers = config.get('max_workers', 4)
        self.debug = config.get('debug', False)
        self.raw_output_dir = config.get('raw_output_dir')

    def validate_config(self) -> bool:
        """Validate inventory collector configuration"""
        if not self.host:
            self.logger.error("vCenter host required for inventory collection")
            return False
        if not self.username:
            self.logger.error("vCenter username required for inventory collection")
            return False
        return True

    def get_system_state(self) -> List[InventoryRow]:
        """Run the collection and return the inventory rows"""
        self.logger.info(f"Connecting to {self.host}...")
        with self.connector:
            self.log_collection_progress("hosts", "Enumerating hosts")
            hosts = self.connector.retrieve_hosts()
            self.logger.info(f"Found {len(hosts)} hosts on {self.host}")
            self._save_raw('hosts.json', [asdict(host) for host in hosts])

            self.log_collection_progress("identity", "Resolving cluster names")
            resolver = IdentityResolver(self.connector, self.name, anonymize=self.anonymize)
            identities = resolver.collect(hosts)

            self.log_collection_progress("vsan", "Aggregating vSAN topology")
            aggregator = StorageTopologyAggregator(
                self.connector,
                self.name,
                parallel=self.parallel_storage,
                max_workers=self.max_workers,
                debug_dump=self.debug
            )
            storage = aggregator.collect(hosts)
            self._save_raw('vsan.json', [facts.to_dict() for facts in storage])

            builder = InventoryRowBuilder(self.name)
            return builder.process(hosts, identities, storage)

    def describe_data(self, data: Any) -> Dict:
        rows = data or []
        return {
            'host_count': len(rows),
            'vsan_hosts': sum(1 for row in rows if row.vsan_type is not VsanArchitecture.NONE),
            'anonymized': self.anonymize
        }

    def _save_raw(self, filename: str, data: Any):
        """Save raw data when debugging with a raw output directory"""
        if self.debug and self.raw_output_dir:
            self.save_raw_data(data, filename, Path(self.raw_output_dir))
