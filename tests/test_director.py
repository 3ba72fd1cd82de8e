# tests/test_director.py
import itertools

import pytest

from multicloud.construction import ConstructionDirector, get_builder, merge_fields
from multicloud.construction import policy
from multicloud.exceptions import InvalidBundle, UnsupportedCategory
from multicloud.providers import SUPPORTED_PROVIDERS


def _director(provider, id_generator=None):
    return ConstructionDirector(get_builder(provider, id_generator))


@pytest.mark.parametrize(
    'provider, category, size',
    list(itertools.product(SUPPORTED_PROVIDERS, policy.CATEGORIES, policy.SIZES)),
)
def test_every_combination_yields_single_provider_bundle(provider, category, size):
    bundle = _director(provider).construct(category, provider, size, 'regiao-1')

    # validate() levanta InvalidBundle se algo estiver errado
    assert bundle.validate() is bundle
    assert bundle.provider == provider

    spec = policy.SIZING_TABLES[category][provider][size]
    memory_flag, disk_flag = policy.CATEGORY_FLAGS[category]
    assert bundle.vm.vcpus == spec.vcpus
    assert bundle.vm.memory_gb == spec.memory_gb
    assert bundle.vm.memory_optimization is memory_flag
    assert bundle.vm.disk_optimization is disk_flag
    assert bundle.disk.size_gb == policy.DEFAULT_DISK_SIZE_GB[category]


def test_memory_optimized_aws_medium():
    bundle = _director('aws').construct_memory_optimized_vm('aws', 'medium', 'us-east-1')

    assert bundle.vm.instance_type == 'r5.xlarge'
    assert bundle.vm.vcpus == 4
    assert bundle.vm.memory_gb == 32
    assert bundle.vm.memory_optimization is True
    assert bundle.vm.disk_optimization is False
    assert bundle.disk.size_gb == 200


def test_instance_class_reaches_provider_specific_field():
    azure = _director('azure').construct_standard_vm('azure', 'large', 'westeurope')
    gcp = _director('gcp').construct_compute_optimized_vm('gcp', 'small', 'us-central1-a')

    assert azure.vm.vm_size == 'D8s_v3'
    assert azure.vm.location == 'westeurope'
    assert gcp.vm.machine_type == 'n2-highcpu-2'
    assert gcp.vm.zone == 'us-central1-a'


def test_unknown_size_falls_back_to_small():
    bundle = _director('gcp').construct('compute-optimized', 'gcp', 'gigantic', 'us-central1-a')

    assert bundle.vm.machine_type == 'n2-highcpu-2'
    assert policy.lookup_instance_spec('aws', 'standard', 'xl') == policy.lookup_instance_spec('aws', 'standard', 'small')


@pytest.mark.parametrize('category, expected', [
    ('standard', 100),
    ('memory-optimized', 200),
    ('compute-optimized', 150),
])
def test_default_disk_size_is_independent_of_provider(category, expected):
    sizes = {
        _director(provider).construct(category, provider, 'small', 'r').disk.size_gb
        for provider in SUPPORTED_PROVIDERS
    }
    assert sizes == {expected}


def test_provider_defaults_are_applied():
    bundle = _director('onpremise').construct_standard_vm('onpremise', 'small', 'dc-porto')

    assert bundle.network.physical_interface == 'eth0'
    assert bundle.network.vlan_id == 100
    assert bundle.network.firewall_policy == 'default-policy'
    assert bundle.disk.storage_pool == 'default-pool'
    assert bundle.disk.raid_level == 'RAID5'
    assert bundle.vm.datacenter == 'dc-porto'


def test_caller_fields_override_defaults_per_field(id_generator):
    params = {
        'key_pair_name': 'minha-chave',
        'vm': {'ami': 'ami-777', 'vpc_id': 'vpc-caller'},
        'network': {'subnet': '192.168.0.0/24', 'firewall_rules': ['allow-ssh'], 'public_ip': True},
        'disk': {'size_gb': 300, 'iops': 3000, 'volume_type': None},
    }

    bundle = _director('aws', id_generator).construct('memory-optimized', 'aws', 'medium', 'us-east-1', params)

    assert bundle.vm.key_pair_name == 'minha-chave'
    assert bundle.vm.ami == 'ami-777'
    assert bundle.vm.vpc_id == 'vpc-caller'
    # Só o campo informado é sobrescrito
    assert bundle.network.subnet == '192.168.0.0/24'
    assert bundle.network.vpc_id == 'vpc-default'
    assert bundle.network.security_group == 'sg-default'
    assert bundle.network.firewall_rules == ['allow-ssh']
    assert bundle.network.public_ip is True
    assert bundle.disk.size_gb == 300
    assert bundle.disk.iops == 3000
    # None do chamador não apaga o default
    assert bundle.disk.volume_type == 'gp3'
    assert bundle.disk.encrypted is True


def test_firewall_and_public_ip_untouched_when_not_supplied():
    bundle = _director('azure').construct_standard_vm('azure', 'small', 'westeurope')

    assert bundle.network.firewall_rules == []
    assert bundle.network.public_ip is False
    assert bundle.disk.iops is None
    assert bundle.vm.key_pair_name is None


def test_unknown_category_is_rejected():
    with pytest.raises(UnsupportedCategory):
        _director('aws').construct('gpu-optimized', 'aws', 'small', 'us-east-1')


def test_director_rejects_provider_other_than_its_builder():
    with pytest.raises(InvalidBundle):
        _director('aws').construct_standard_vm('gcp', 'small', 'us-central1-a')


def test_set_builder_switches_provider():
    director = _director('aws')
    director.set_builder(get_builder('gcp'))

    assert director.construct_standard_vm('gcp', 'small', 'z').provider == 'gcp'


def test_merge_fields_precedence():
    merged = merge_fields(
        {'a': 1, 'b': 1, 'c': 1},
        {'b': 2, 'c': 2},
        {'c': 3, 'a': None},
    )
    assert merged == {'a': 1, 'b': 2, 'c': 3}


def test_section_region_does_not_override_request_region():
    params = {
        'network': {'region': 'outra-regiao', 'subnet': '10.1.0.0/24'},
        'disk': {'region': 'outra-regiao', 'size_gb': 40},
    }

    bundle = _director('aws').construct_standard_vm('aws', 'small', 'us-east-1', params)

    assert bundle.network.region == 'us-east-1'
    assert bundle.network.subnet == '10.1.0.0/24'
    assert bundle.disk.region == 'us-east-1'
    assert bundle.disk.size_gb == 40
