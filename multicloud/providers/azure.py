from dataclasses import dataclass
from typing import ClassVar

from multicloud.providers.base import Disk, Network, ResourceFactory, VirtualMachine


@dataclass
class AzureVirtualMachine(VirtualMachine):
    provider: ClassVar[str] = 'azure'
    # location é persistida como 'region', image_reference como 'image'
    SERIALIZED_FIELDS = (
        ('vm_size', 'vm_size'),
        ('location', 'region'),
        ('resource_group', 'resource_group'),
        ('image_reference', 'image'),
    )

    vm_size: str = None
    location: str = None
    resource_group: str = None
    image_reference: str = None


@dataclass
class AzureNetwork(Network):
    provider: ClassVar[str] = 'azure'
    CONFIG_FIELDS = (
        ('virtual_network', 'virtualNetwork'),
        ('subnet_name', 'subnetName'),
        ('network_security_group', 'networkSecurityGroup'),
    )

    virtual_network: str = None
    subnet_name: str = None
    network_security_group: str = None


@dataclass
class AzureDisk(Disk):
    """Managed disk."""

    provider: ClassVar[str] = 'azure'
    CONFIG_FIELDS = (
        ('disk_sku', 'diskSku'),
        ('managed_disk', 'managedDisk'),
    )

    disk_sku: str = None
    managed_disk: bool = False


class AzureFactory(ResourceFactory):
    """Família de recursos Azure: VM, Virtual Network e Managed Disk."""

    provider = 'azure'

    def create_vm(self, params):
        return AzureVirtualMachine(
            id=self._new_id('vm'),
            vm_size=self._first(params, 'vm_size', 'instance_type'),
            location=self._first(params, 'location', 'region'),
            resource_group=params.get('resource_group'),
            image_reference=self._first(params, 'image_reference', 'image'),
            **self._vm_common(params),
        )

    def create_network(self, params):
        return AzureNetwork(
            id=self._new_id('net'),
            virtual_network=params.get('virtual_network'),
            subnet_name=params.get('subnet_name'),
            network_security_group=params.get('network_security_group'),
            **self._network_common(params),
        )

    def create_disk(self, params):
        return AzureDisk(
            id=self._new_id('disk'),
            disk_sku=params.get('disk_sku'),
            managed_disk=bool(params.get('managed_disk', False)),
            **self._disk_common(params),
        )
