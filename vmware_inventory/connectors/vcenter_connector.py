# vmware_inventory/connectors/vcenter_connector.py
"""
vCenter connector built on pyVmomi.
Handles the session to the vCenter server and translates managed objects
into the inventory data model.
"""

import ssl
import time
import logging
from typing import Optional, Dict, Any, List, Tuple

from pyVim.connect import SmartConnect, Disconnect
from pyVmomi import vim, vmodl

from .base_connector import InventoryConnector
from ..exceptions import VCenterConnectionError, PropertyRetrievalError
from ..models import (
    HostRecord,
    HostHardware,
    ManagedRef,
    VsanConfig,
    DiskMapping,
    VsanDisk
)

HOST_PROPERTIES = [
    'summary.config.name',
    'summary.config.product',
    'summary.hardware',
    'hardware',
    'configManager.vsanSystem',
    'parent'
]


def to_ref(managed_object) -> Optional[ManagedRef]:
    """Build a ManagedRef from a pyVmomi managed object"""
    if managed_object is None:
        return None
    return ManagedRef(type=managed_object._wsdlName, value=managed_object._moId)


def translate_hardware(hardware) -> Optional[HostHardware]:
    """Translate vim.host.HardwareInfo"""
    if hardware is None:
        return None

    cpu_info = getattr(hardware, 'cpuInfo', None)
    return HostHardware(
        cpu_packages=[pkg.description or '' for pkg in (getattr(hardware, 'cpuPkg', None) or [])],
        num_cpu_packages=getattr(cpu_info, 'numCpuPackages', 0) or 0,
        num_cpu_cores=getattr(cpu_info, 'numCpuCores', 0) or 0,
        memory_size=getattr(hardware, 'memorySize', 0) or 0
    )


def translate_host(props: Dict[str, Any]) -> HostRecord:
    """
    Translate the property set of one HostSystem.

    Args:
        props: Mapping of property path -> value, plus 'obj' for the host itself

    Returns:
        HostRecord
    """
    summary_hardware = props.get('summary.hardware')
    product = props.get('summary.config.product')

    return HostRecord(
        ref=to_ref(props['obj']),
        name=props.get('summary.config.name') or '',
        model=summary_hardware.model if summary_hardware is not None else None,
        product_version=product.version if product is not None else None,
        hardware=translate_hardware(props.get('hardware')),
        parent=to_ref(props.get('parent')),
        vsan_system=to_ref(props.get('configManager.vsanSystem'))
    )


def translate_disk(scsi_disk) -> VsanDisk:
    """Translate vim.host.ScsiDisk"""
    capacity = getattr(scsi_disk, 'capacity', None)
    return VsanDisk(
        name=getattr(scsi_disk, 'displayName', None) or getattr(scsi_disk, 'canonicalName', None) or '',
        block_size=getattr(capacity, 'blockSize', 0) or 0,
        block=getattr(capacity, 'block', 0) or 0,
        in_vsan=getattr(scsi_disk, 'vsanDiskInfo', None) is not None
    )


def translate_vsan_config(config) -> VsanConfig:
    """Translate vim.vsan.host.ConfigInfo"""
    if config is None:
        return VsanConfig()

    storage_info = getattr(config, 'storageInfo', None)
    disk_mappings = None
    if storage_info is not None:
        disk_mappings = [
            DiskMapping(
                ssd=translate_disk(mapping.ssd) if mapping.ssd is not None else None,
                non_ssd=[translate_disk(disk) for disk in (mapping.nonSsd or [])]
            )
            for mapping in (storage_info.diskMapping or [])
        ]

    return VsanConfig(
        enabled=getattr(config, 'enabled', None),
        esa_enabled=getattr(config, 'vsanEsaEnabled', None),
        disk_mappings=disk_mappings
    )


class VCenterConnector(InventoryConnector):
    """
    Connector for a vCenter server.
    Keeps the managed objects seen during host enumeration so that later
    lookups by reference reuse them.
    """

    def __init__(self, host: str, username: str, password: str = None, port: int = 443,
                 insecure: bool = True, timeout: int = 30):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.insecure = insecure
        self.timeout = timeout

        self.service_instance = None
        self._objects: Dict[Tuple[str, str], Any] = {}
        self.logger = logging.getLogger(f'vcenter_connector.{host}')

    def connect(self) -> bool:
        """
        Establish a session with the vCenter server.

        Returns:
            bool: True if connection successful, False otherwise
        """
        ssl_context = None
        if self.insecure:
            ssl_context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
            self.logger.debug("TLS certificate verification disabled")

        try:
            self.service_instance = SmartConnect(
                host=self.host,
                user=self.username,
                pwd=self.password,
                port=self.port,
                sslContext=ssl_context,
                httpConnectionTimeout=self.timeout
            )
            self.logger.info(f"Connected to vCenter {self.host}:{self.port}")
            return True

        except vim.fault.InvalidLogin:
            self.logger.error(f"Authentication failed for {self.username}@{self.host}")
            return False
        except ssl.SSLError as e:
            self.logger.error(f"TLS handshake with {self.host} failed: {e}")
            return False
        except Exception as e:
            self.logger.error(f"Error connecting to vCenter {self.host}: {e}")
            return False

    def disconnect(self):
        """Log out of the vCenter session"""
        if self.service_instance:
            try:
                Disconnect(self.service_instance)
                self.logger.debug(f"Logged out of {self.host}")
            except Exception as e:
                self.logger.warning(f"Logout from {self.host} failed: {e}")
            finally:
                self.service_instance = None
                self._objects.clear()

    def retrieve_hosts(self) -> List[HostRecord]:
        """Enumerate all HostSystem objects below the root folder"""
        if not self.service_instance:
            raise VCenterConnectionError(f"No session established with {self.host}")

        start_time = time.time()
        try:
            host_props = self._collect_properties(vim.HostSystem, HOST_PROPERTIES)
        except Exception as e:
            raise VCenterConnectionError(f"Error retrieving hosts from {self.host}", cause=e)

        hosts = []
        for props in host_props:
            for key in ('obj', 'parent', 'configManager.vsanSystem'):
                self._remember(props.get(key))
            hosts.append(translate_host(props))

        self.logger.info(f"Retrieved {len(hosts)} hosts in {time.time() - start_time:.2f}s")
        return hosts

    def retrieve_name(self, ref: ManagedRef) -> str:
        managed_object = self._lookup(ref)
        try:
            return managed_object.name
        except Exception as e:
            raise PropertyRetrievalError(f"Could not retrieve name of {ref}", ref=ref, cause=e)

    def retrieve_vsan_config(self, ref: ManagedRef) -> VsanConfig:
        vsan_system = self._lookup(ref)
        try:
            return translate_vsan_config(vsan_system.config)
        except Exception as e:
            raise PropertyRetrievalError(f"Could not retrieve vSAN config of {ref}", ref=ref, cause=e)

    def query_vsan_disks(self, ref: ManagedRef) -> List[VsanDisk]:
        vsan_system = self._lookup(ref)
        try:
            results = vsan_system.QueryDisksForVsan() or []
        except Exception as e:
            raise PropertyRetrievalError(f"Could not query vSAN disks of {ref}", ref=ref, cause=e)

        return [translate_disk(result.disk) for result in results if result.disk is not None]

    def _remember(self, managed_object):
        if managed_object is not None:
            self._objects[(managed_object._wsdlName, managed_object._moId)] = managed_object

    def _lookup(self, ref: ManagedRef):
        """Resolve a ManagedRef back to the managed object"""
        managed_object = self._objects.get((ref.type, ref.value))
        if managed_object is None:
            raise PropertyRetrievalError(f"Unknown managed object {ref}", ref=ref)
        return managed_object

    def _collect_properties(self, obj_type, properties: List[str]) -> List[Dict[str, Any]]:
        """
        Retrieve properties of every object of a type through a container view.

        Args:
            obj_type: pyVmomi type to enumerate
            properties: Property paths to fetch

        Returns:
            List of dicts mapping property path -> value, with 'obj' set to the object
        """
        content = self.service_instance.RetrieveContent()
        view = content.viewManager.CreateContainerView(content.rootFolder, [obj_type], True)

        try:
            obj_spec = vmodl.query.PropertyCollector.ObjectSpec(
                obj=view, skip=True,
                selectSet=[
                    vmodl.query.PropertyCollector.TraversalSpec(
                        name='traverseView', path='view', skip=False, type=vim.view.ContainerView
                    )
                ]
            )
            prop_spec = vmodl.query.PropertyCollector.PropertySpec(
                type=obj_type, all=False, pathSet=properties
            )
            filter_spec = vmodl.query.PropertyCollector.FilterSpec(
                objectSet=[obj_spec], propSet=[prop_spec]
            )

            results = []
            collector = content.propertyCollector
            response = collector.RetrievePropertiesEx(
                specSet=[filter_spec], options=vmodl.query.PropertyCollector.RetrieveOptions()
            )
            while response:
                for object_content in response.objects:
                    item = {'obj': object_content.obj}
                    for prop in object_content.propSet:
                        item[prop.name] = prop.val
                    for missing in (object_content.missingSet or []):
                        self.logger.debug(f"Property {missing.path} missing for {object_content.obj}")
                        item[missing.path] = None
                    results.append(item)

                if response.token:
                    response = collector.ContinueRetrievePropertiesEx(token=response.token)
                else:
                    break

            return results

        finally:
            view.Destroy()
