# vmware_inventory/collectors/sub_collectors/identity_resolver.py
"""
Identity Resolver
Resolves the owning cluster/folder of each host to a display name and,
when requested, replaces host and cluster names with stable synthetic labels.
"""

from typing import Dict, List, Optional

from .base_sub_collector import SubCollector
from ...exceptions import PropertyRetrievalError
from ...models import HostRecord, HostIdentity, ManagedRef


class GroupNameMap:
    """
    Memoized mapping of group back-reference -> display name for one run.
    A reference whose lookup failed maps to an empty string.
    """

    def __init__(self):
        self._names: Dict[str, str] = {}

    def __contains__(self, ref: ManagedRef) -> bool:
        return ref is not None and ref.value in self._names

    def __len__(self) -> int:
        return len(self._names)

    def set(self, ref: ManagedRef, name: str):
        self._names[ref.value] = name or ''

    def get(self, ref: Optional[ManagedRef]) -> str:
        if ref is None:
            return ''
        return self._names.get(ref.value, '')


class AnonymizedLabelMap:
    """
    Maps real group names to synthetic labels ("Cluster 1", "Cluster 2", ...)
    in first-encounter order.
    """

    def __init__(self, prefix: str = 'Cluster'):
        self.prefix = prefix
        self._labels: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, real_name: str) -> bool:
        return real_name in self._labels

    def assign(self, real_name: str) -> str:
        """Return the label for real_name, assigning the next one on first sight"""
        if real_name not in self._labels:
            self._labels[real_name] = f"{self.prefix} {len(self._labels) + 1}"
        return self._labels[real_name]

    def get(self, real_name: str) -> str:
        return self._labels.get(real_name, '')


class IdentityResolver(SubCollector):
    """
    Builds the display identity (hostname, cluster) of every host.

    Each distinct parent reference is resolved at most once. A failed lookup
    is logged and leaves the cluster empty for every host sharing that parent.
    """

    def __init__(self, connector, system_name: str, anonymize: bool = False,
                 host_label_prefix: str = 'Host', group_label_prefix: str = 'Cluster'):
        super().__init__(connector, system_name)
        self.anonymize = anonymize
        self.host_label_prefix = host_label_prefix
        self.group_label_prefix = group_label_prefix

    def get_section_name(self) -> str:
        return "identity"

    def collect(self, hosts: List[HostRecord]) -> List[HostIdentity]:
        """
        Resolve identities for all hosts

        Args:
            hosts: Hosts in host-list order

        Returns:
            One HostIdentity per host, in the same order
        """
        self.log_start(len(hosts))

        group_names = self.resolve_group_names(hosts)
        labels = self.build_anonymized_labels(hosts, group_names) if self.anonymize else None

        identities = [
            self.identity_for(index, host, group_names, labels)
            for index, host in enumerate(hosts)
        ]

        self.log_end(len(group_names))
        return identities

    def resolve_group_names(self, hosts: List[HostRecord],
                            group_names: GroupNameMap = None) -> GroupNameMap:
        """
        Resolve the display name of every distinct parent reference.

        Args:
            hosts: Hosts in host-list order
            group_names: Existing map to extend, a new one is created if omitted

        Returns:
            GroupNameMap with one entry per distinct parent
        """
        if group_names is None:
            group_names = GroupNameMap()

        for host in hosts:
            parent = host.parent
            if parent is None or parent in group_names:
                continue

            try:
                name = self.connector.retrieve_name(parent)
                self.logger.debug(f"Resolved {parent} to '{name}'")
            except PropertyRetrievalError as e:
                self.logger.warning(f"Could not retrieve cluster name for {host.name} ({parent}): {e}")
                name = ''

            group_names.set(parent, name)

        return group_names

    def build_anonymized_labels(self, hosts: List[HostRecord],
                                group_names: GroupNameMap) -> AnonymizedLabelMap:
        """Assign synthetic cluster labels in first-encounter order of real names"""
        labels = AnonymizedLabelMap(self.group_label_prefix)

        for host in hosts:
            if host.parent is None:
                continue
            labels.assign(group_names.get(host.parent))

        return labels

    def identity_for(self, index: int, host: HostRecord, group_names: GroupNameMap,
                     labels: AnonymizedLabelMap = None) -> HostIdentity:
        """
        Build the identity of the host at position index (0-based).
        Ungrouped hosts get an empty cluster, anonymized or not.
        """
        cluster = ''
        if host.parent is not None:
            cluster = group_names.get(host.parent)
            if labels is not None:
                cluster = labels.get(cluster)

        if labels is not None:
            hostname = f"{self.host_label_prefix} {index + 1}"
        else:
            hostname = host.name or ''

        return HostIdentity(hostname=hostname, cluster=cluster)
