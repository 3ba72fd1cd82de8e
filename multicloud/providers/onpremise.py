from dataclasses import dataclass
from typing import ClassVar

from multicloud.providers.base import Disk, Network, ResourceFactory, VirtualMachine


@dataclass
class OnPremiseVirtualMachine(VirtualMachine):
    """VM local (VMware, KVM, Hyper-V)."""

    provider: ClassVar[str] = 'onpremise'
    SERIALIZED_FIELDS = (
        ('instance_type', 'instance_type'),
        ('hypervisor', 'hypervisor'),
        ('datacenter', 'datacenter'),
    )

    instance_type: str = None
    hypervisor: str = None
    datacenter: str = None


@dataclass
class OnPremiseNetwork(Network):
    """VLAN sobre interface física."""

    provider: ClassVar[str] = 'onpremise'
    CONFIG_FIELDS = (
        ('physical_interface', 'physicalInterface'),
        ('vlan_id', 'vlanId'),
        ('firewall_policy', 'firewallPolicy'),
    )

    physical_interface: str = None
    vlan_id: int = None
    firewall_policy: str = None


@dataclass
class OnPremiseDisk(Disk):
    """Disco em storage local ou SAN."""

    provider: ClassVar[str] = 'onpremise'
    CONFIG_FIELDS = (
        ('storage_pool', 'storagePool'),
        ('raid_level', 'raidLevel'),
    )

    storage_pool: str = None
    raid_level: str = None


class OnPremiseFactory(ResourceFactory):
    """
    Família de recursos da infraestrutura local.
    Aceita os nomes antigos 'cpu'/'ram' como aliases de vcpus/memory_gb e usa
    a região como datacenter quando este não é informado.
    """

    provider = 'onpremise'

    def create_vm(self, params):
        common = self._vm_common(params)
        common['vcpus'] = self._first(params, 'vcpus', 'cpu')
        common['memory_gb'] = self._first(params, 'memory_gb', 'ram')

        return OnPremiseVirtualMachine(
            id=self._new_id('vm'),
            instance_type=params.get('instance_type'),
            hypervisor=params.get('hypervisor'),
            datacenter=self._first(params, 'datacenter', 'region'),
            **common,
        )

    def create_network(self, params):
        return OnPremiseNetwork(
            id=self._new_id('net'),
            physical_interface=params.get('physical_interface'),
            vlan_id=params.get('vlan_id'),
            firewall_policy=params.get('firewall_policy'),
            **self._network_common(params),
        )

    def create_disk(self, params):
        return OnPremiseDisk(
            id=self._new_id('disk'),
            storage_pool=params.get('storage_pool'),
            raid_level=params.get('raid_level'),
            **self._disk_common(params),
        )
