"""
Políticas de dimensionamento e defaults por provedor usadas pelo Director.

As tabelas são reproduzidas literalmente (incluindo o disco de 150GB para
compute-optimized).
"""
from dataclasses import dataclass

from multicloud.exceptions import UnsupportedCategory
from multicloud.providers.base import normalize_provider


@dataclass(frozen=True)
class InstanceSpec:
    instance_type: str
    vcpus: int
    memory_gb: int


STANDARD = 'standard'
MEMORY_OPTIMIZED = 'memory-optimized'
COMPUTE_OPTIMIZED = 'compute-optimized'

CATEGORIES = (STANDARD, MEMORY_OPTIMIZED, COMPUTE_OPTIMIZED)
SIZES = ('small', 'medium', 'large')
DEFAULT_SIZE = 'small'

SIZING_TABLES = {
    STANDARD: {
        'aws': {
            'small': InstanceSpec('t3.medium', 2, 4),
            'medium': InstanceSpec('m5.large', 2, 8),
            'large': InstanceSpec('m5.xlarge', 4, 16),
        },
        'azure': {
            'small': InstanceSpec('D2s_v3', 2, 8),
            'medium': InstanceSpec('D4s_v3', 4, 16),
            'large': InstanceSpec('D8s_v3', 8, 32),
        },
        'gcp': {
            'small': InstanceSpec('e2-standard-2', 2, 8),
            'medium': InstanceSpec('e2-standard-4', 4, 16),
            'large': InstanceSpec('e2-standard-8', 8, 32),
        },
        'onpremise': {
            'small': InstanceSpec('onprem-std1', 2, 4),
            'medium': InstanceSpec('onprem-std2', 4, 8),
            'large': InstanceSpec('onprem-std3', 8, 16),
        },
    },
    MEMORY_OPTIMIZED: {
        'aws': {
            'small': InstanceSpec('r5.large', 2, 16),
            'medium': InstanceSpec('r5.xlarge', 4, 32),
            'large': InstanceSpec('r5.2xlarge', 8, 64),
        },
        'azure': {
            'small': InstanceSpec('E2s_v3', 2, 16),
            'medium': InstanceSpec('E4s_v3', 4, 32),
            'large': InstanceSpec('E8s_v3', 8, 64),
        },
        'gcp': {
            'small': InstanceSpec('n2-highmem-2', 2, 16),
            'medium': InstanceSpec('n2-highmem-4', 4, 32),
            'large': InstanceSpec('n2-highmem-8', 8, 64),
        },
        'onpremise': {
            'small': InstanceSpec('onprem-mem1', 2, 16),
            'medium': InstanceSpec('onprem-mem2', 4, 32),
            'large': InstanceSpec('onprem-mem3', 8, 64),
        },
    },
    COMPUTE_OPTIMIZED: {
        'aws': {
            'small': InstanceSpec('c5.large', 2, 4),
            'medium': InstanceSpec('c5.xlarge', 4, 8),
            'large': InstanceSpec('c5.2xlarge', 8, 16),
        },
        'azure': {
            'small': InstanceSpec('F2s_v2', 2, 4),
            'medium': InstanceSpec('F4s_v2', 4, 8),
            'large': InstanceSpec('F8s_v2', 8, 16),
        },
        'gcp': {
            'small': InstanceSpec('n2-highcpu-2', 2, 2),
            'medium': InstanceSpec('n2-highcpu-4', 4, 4),
            'large': InstanceSpec('n2-highcpu-8', 8, 8),
        },
        'onpremise': {
            'small': InstanceSpec('onprem-cpu1', 2, 2),
            'medium': InstanceSpec('onprem-cpu2', 4, 4),
            'large': InstanceSpec('onprem-cpu3', 8, 8),
        },
    },
}

# (memory_optimization, disk_optimization)
CATEGORY_FLAGS = {
    STANDARD: (False, False),
    MEMORY_OPTIMIZED: (True, False),
    COMPUTE_OPTIMIZED: (False, True),
}

DEFAULT_DISK_SIZE_GB = {
    STANDARD: 100,
    MEMORY_OPTIMIZED: 200,
    COMPUTE_OPTIMIZED: 150,
}

NETWORK_DEFAULTS = {
    'aws': {
        'vpc_id': 'vpc-default',
        'subnet': '10.0.0.0/24',
        'security_group': 'sg-default',
    },
    'azure': {
        'virtual_network': 'default-vnet',
        'subnet_name': 'default-subnet',
        'network_security_group': 'default-nsg',
    },
    'gcp': {
        'network_name': 'default',
        'subnetwork_name': 'default',
        'firewall_tag': 'default-tag',
    },
    'onpremise': {
        'physical_interface': 'eth0',
        'vlan_id': 100,
        'firewall_policy': 'default-policy',
    },
}

DISK_DEFAULTS = {
    'aws': {'volume_type': 'gp3', 'encrypted': True},
    'azure': {'disk_sku': 'Standard_LRS', 'managed_disk': True},
    'gcp': {'disk_type': 'pd-standard', 'auto_delete': True},
    'onpremise': {'storage_pool': 'default-pool', 'raid_level': 'RAID5'},
}


def normalize_category(category):
    tag = str(category or '').strip().lower()
    if tag not in CATEGORIES:
        raise UnsupportedCategory(category)
    return tag


def lookup_instance_spec(provider, category, size):
    """Tamanho desconhecido cai silenciosamente para 'small'."""
    table = SIZING_TABLES[normalize_category(category)][normalize_provider(provider)]
    key = str(size or '').strip().lower()
    return table.get(key, table[DEFAULT_SIZE])


def default_disk_size(category):
    return DEFAULT_DISK_SIZE_GB[normalize_category(category)]


def network_defaults(provider):
    return dict(NETWORK_DEFAULTS[normalize_provider(provider)])


def disk_defaults(provider):
    return dict(DISK_DEFAULTS[normalize_provider(provider)])
