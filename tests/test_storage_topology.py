"""
Tests for vSAN topology aggregation (OSA disk groups and ESA storage pools).
"""

import logging

import pytest

from vmware_inventory.collectors.sub_collectors.storage_topology import StorageTopologyAggregator
from vmware_inventory.models import VsanArchitecture, VsanConfig, StorageFacts
from vmware_inventory.utils.units import format_tib

from conftest import FakeConnector, make_host, make_disk, make_disk_group, TB_BLOCKS


def aggregate(connector, host, **kwargs) -> StorageFacts:
    return StorageTopologyAggregator(connector, 'vc', **kwargs).aggregate(host)


class TestNoVsan:
    """Hosts that do not contribute to vSAN"""

    def test_no_vsan_reference(self, connector):
        facts = aggregate(connector, make_host(1))

        assert facts == StorageFacts()
        assert facts.architecture is VsanArchitecture.NONE
        assert (facts.capacity_disks, facts.cache_disks, facts.capacity_bytes) == (0, 0, 0)
        assert connector.config_lookups == []

    def test_config_fetch_failure_degrades_to_none(self, connector, caplog):
        connector.failing_configs.add('vsan-1')

        with caplog.at_level(logging.WARNING):
            facts = aggregate(connector, make_host(1, vsan='vsan-1'))

        assert facts.architecture is VsanArchitecture.NONE
        assert facts.capacity_disks == 0
        assert any('esx01.lab.local' in r.message for r in caplog.records if r.levelno == logging.WARNING)

    def test_osa_without_storage_info(self, connector):
        connector.vsan_configs['vsan-1'] = VsanConfig(enabled=True, disk_mappings=None)
        assert aggregate(connector, make_host(1, vsan='vsan-1')).architecture is VsanArchitecture.NONE

    def test_osa_with_empty_disk_mapping(self, connector):
        connector.vsan_configs['vsan-1'] = VsanConfig(enabled=True, esa_enabled=False, disk_mappings=[])
        facts = aggregate(connector, make_host(1, vsan='vsan-1'))
        assert facts == StorageFacts.none()


class TestOsa:
    """OSA disk-group accounting"""

    def test_single_disk_group(self, connector):
        connector.vsan_configs['vsan-1'] = VsanConfig(disk_mappings=[make_disk_group('naa.cache0', 4)])
        facts = aggregate(connector, make_host(1, vsan='vsan-1'))

        assert facts.architecture is VsanArchitecture.OSA
        assert facts.cache_disks == 1
        assert facts.capacity_disks == 4
        assert facts.capacity_bytes == 4 * 512 * TB_BLOCKS
        assert format_tib(facts.capacity_tib) == '3.6'

    def test_cache_disks_excluded_from_capacity(self, connector):
        group = make_disk_group('naa.cache0', 0)
        connector.vsan_configs['vsan-1'] = VsanConfig(disk_mappings=[group])
        facts = aggregate(connector, make_host(1, vsan='vsan-1'))

        assert facts.architecture is VsanArchitecture.OSA
        assert facts.cache_disks == 1
        assert facts.capacity_disks == 0
        assert facts.capacity_bytes == 0

    @pytest.mark.parametrize('group_sizes', [[1], [3, 3], [7, 2, 5], [0, 4]])
    def test_counts_follow_disk_groups(self, connector, group_sizes):
        mappings = [make_disk_group(f'naa.cache{i}', size) for i, size in enumerate(group_sizes)]
        connector.vsan_configs['vsan-1'] = VsanConfig(esa_enabled=False, disk_mappings=mappings)
        facts = aggregate(connector, make_host(1, vsan='vsan-1'))

        assert facts.cache_disks == len(group_sizes)
        assert facts.capacity_disks == sum(group_sizes)
        assert [g.capacity_disks for g in facts.disk_groups] == group_sizes
        assert facts.unclaimed_disks == 0

    def test_does_not_query_disks(self, connector):
        connector.vsan_configs['vsan-1'] = VsanConfig(disk_mappings=[make_disk_group('naa.cache0', 2)])
        aggregate(connector, make_host(1, vsan='vsan-1'))
        assert connector.disk_queries == []


class TestEsa:
    """ESA single-tier accounting"""

    @pytest.fixture
    def esa_connector(self):
        connector = FakeConnector(vsan_configs={'vsan-1': VsanConfig(enabled=True, esa_enabled=True)})
        connector.vsan_disks['vsan-1'] = [
            make_disk('nvme0', blocks=2 * TB_BLOCKS),
            make_disk('nvme1', blocks=2 * TB_BLOCKS),
            make_disk('nvme2', blocks=2 * TB_BLOCKS, in_vsan=False),
            make_disk('boot', blocks=TB_BLOCKS // 10, in_vsan=False),
        ]
        return connector

    def test_only_claimed_disks_counted(self, esa_connector):
        facts = aggregate(esa_connector, make_host(1, vsan='vsan-1'))

        assert facts.architecture is VsanArchitecture.ESA
        assert facts.capacity_disks == 2
        assert facts.capacity_bytes == 2 * 2 * 512 * TB_BLOCKS
        assert facts.unclaimed_disks == 2

    def test_cache_count_always_zero(self, esa_connector):
        facts = aggregate(esa_connector, make_host(1, vsan='vsan-1'))
        assert facts.cache_disks == 0
        assert facts.disk_groups == ()

    def test_esa_flag_wins_over_disk_mappings(self, esa_connector):
        esa_connector.vsan_configs['vsan-1'] = VsanConfig(
            esa_enabled=True, disk_mappings=[make_disk_group('naa.cache0', 4)]
        )
        facts = aggregate(esa_connector, make_host(1, vsan='vsan-1'))
        assert facts.architecture is VsanArchitecture.ESA
        assert facts.cache_disks == 0

    def test_zero_disks_keeps_architecture(self):
        connector = FakeConnector(vsan_configs={'vsan-1': VsanConfig(esa_enabled=True)})
        facts = aggregate(connector, make_host(1, vsan='vsan-1'))

        assert facts.architecture is VsanArchitecture.ESA
        assert (facts.capacity_disks, facts.cache_disks, facts.capacity_bytes) == (0, 0, 0)

    def test_disk_query_failure_keeps_architecture(self, esa_connector, caplog):
        esa_connector.failing_disk_queries.add('vsan-1')

        with caplog.at_level(logging.WARNING):
            facts = aggregate(esa_connector, make_host(1, vsan='vsan-1'))

        assert facts.architecture is VsanArchitecture.ESA
        assert facts.capacity_disks == 0
        assert any('Could not query vSAN disks' in r.message for r in caplog.records)


class TestCollect:
    """Batch aggregation over a host list"""

    @pytest.fixture
    def mixed_connector(self):
        hosts = [make_host(i, vsan=f'vsan-{i}' if i % 3 else None) for i in range(1, 13)]
        connector = FakeConnector(hosts=hosts)
        for i in range(1, 13):
            if i % 2:
                connector.vsan_configs[f'vsan-{i}'] = VsanConfig(disk_mappings=[make_disk_group('c', i)])
            else:
                connector.vsan_configs[f'vsan-{i}'] = VsanConfig(esa_enabled=True)
                connector.vsan_disks[f'vsan-{i}'] = [make_disk(f'd{n}') for n in range(i)]
        connector.failing_configs.add('vsan-5')
        return connector

    def expected(self, index):
        if index % 3 == 0 or index == 5:
            return VsanArchitecture.NONE, 0
        return (VsanArchitecture.OSA if index % 2 else VsanArchitecture.ESA), index

    def test_sequential_preserves_order(self, mixed_connector):
        facts = StorageTopologyAggregator(mixed_connector, 'vc').collect(mixed_connector.hosts)
        assert [(f.architecture, f.capacity_disks) for f in facts] == [self.expected(i) for i in range(1, 13)]

    def test_parallel_preserves_order(self, mixed_connector):
        aggregator = StorageTopologyAggregator(mixed_connector, 'vc', parallel=True, max_workers=4)
        facts = aggregator.collect(mixed_connector.hosts)
        assert [(f.architecture, f.capacity_disks) for f in facts] == [self.expected(i) for i in range(1, 13)]

    def test_debug_dump_logs_raw_config(self, mixed_connector, caplog):
        with caplog.at_level(logging.DEBUG, logger='subcollector.StorageTopologyAggregator'):
            StorageTopologyAggregator(mixed_connector, 'vc', debug_dump=True).aggregate(mixed_connector.hosts[0])
        assert any('=== vSAN system for esx01.lab.local ===' in r.message for r in caplog.records)
