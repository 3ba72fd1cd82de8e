from dataclasses import dataclass
from typing import ClassVar

from multicloud.providers.base import Disk, Network, ResourceFactory, VirtualMachine


@dataclass
class AWSVirtualMachine(VirtualMachine):
    """Instância EC2."""

    provider: ClassVar[str] = 'aws'
    SERIALIZED_FIELDS = (
        ('instance_type', 'instance_type'),
        ('region', 'region'),
        ('vpc_id', 'vpc_id'),
        ('ami', 'ami'),
    )

    instance_type: str = None
    region: str = None
    vpc_id: str = None
    ami: str = None


@dataclass
class AWSNetwork(Network):
    """VPC + subnet + security group."""

    provider: ClassVar[str] = 'aws'
    CONFIG_FIELDS = (
        ('vpc_id', 'vpcId'),
        ('subnet', 'subnet'),
        ('security_group', 'securityGroup'),
    )

    vpc_id: str = None
    subnet: str = None
    security_group: str = None


@dataclass
class AWSDisk(Disk):
    """Volume EBS."""

    provider: ClassVar[str] = 'aws'
    CONFIG_FIELDS = (
        ('volume_type', 'volumeType'),
        ('encrypted', 'encrypted'),
    )

    volume_type: str = None
    encrypted: bool = False


class AWSFactory(ResourceFactory):
    """Família de recursos AWS: EC2, VPC e EBS."""

    provider = 'aws'

    def create_vm(self, params):
        return AWSVirtualMachine(
            id=self._new_id('vm'),
            instance_type=params.get('instance_type'),
            region=params.get('region'),
            vpc_id=params.get('vpc_id'),
            ami=params.get('ami'),
            **self._vm_common(params),
        )

    def create_network(self, params):
        return AWSNetwork(
            id=self._new_id('net'),
            vpc_id=params.get('vpc_id'),
            subnet=params.get('subnet'),
            security_group=params.get('security_group'),
            **self._network_common(params),
        )

    def create_disk(self, params):
        return AWSDisk(
            id=self._new_id('disk'),
            volume_type=params.get('volume_type'),
            encrypted=bool(params.get('encrypted', False)),
            **self._disk_common(params),
        )
