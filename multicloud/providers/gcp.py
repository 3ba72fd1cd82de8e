from dataclasses import dataclass
from typing import ClassVar

from multicloud.providers.base import Disk, Network, ResourceFactory, VirtualMachine


@dataclass
class GCPVirtualMachine(VirtualMachine):
    """Instância do Compute Engine."""

    provider: ClassVar[str] = 'gcp'
    SERIALIZED_FIELDS = (
        ('machine_type', 'machine_type'),
        ('zone', 'zone'),
        ('disk', 'disk'),
        ('project', 'project'),
    )

    machine_type: str = None
    zone: str = None
    disk: str = None
    project: str = None


@dataclass
class GCPNetwork(Network):
    provider: ClassVar[str] = 'gcp'
    CONFIG_FIELDS = (
        ('network_name', 'networkName'),
        ('subnetwork_name', 'subnetworkName'),
        ('firewall_tag', 'firewallTag'),
    )

    network_name: str = None
    subnetwork_name: str = None
    firewall_tag: str = None


@dataclass
class GCPDisk(Disk):
    """Persistent disk."""

    provider: ClassVar[str] = 'gcp'
    CONFIG_FIELDS = (
        ('disk_type', 'diskType'),
        ('auto_delete', 'autoDelete'),
    )

    disk_type: str = None
    auto_delete: bool = False


class GCPFactory(ResourceFactory):
    provider = 'gcp'

    def create_vm(self, params):
        return GCPVirtualMachine(
            id=self._new_id('vm'),
            machine_type=self._first(params, 'machine_type', 'instance_type'),
            zone=self._first(params, 'zone', 'region'),
            disk=params.get('disk'),
            project=params.get('project'),
            **self._vm_common(params),
        )

    def create_network(self, params):
        return GCPNetwork(
            id=self._new_id('net'),
            network_name=params.get('network_name'),
            subnetwork_name=params.get('subnetwork_name'),
            firewall_tag=params.get('firewall_tag'),
            **self._network_common(params),
        )

    def create_disk(self, params):
        return GCPDisk(
            id=self._new_id('disk'),
            disk_type=params.get('disk_type'),
            auto_delete=bool(params.get('auto_delete', False)),
            **self._disk_common(params),
        )
