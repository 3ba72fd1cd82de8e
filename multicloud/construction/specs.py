"""
Estruturas de configuração acumuladas pelo Builder e a regra de merge.

Precedência (da maior para a menor), campo a campo, sem merge profundo:
    1. valor informado pelo chamador
    2. default da categoria da VM
    3. default do provedor
Um valor None do chamador não sobrescreve o default.
"""
from dataclasses import dataclass, field, fields


def merge_fields(provider_defaults=None, category_defaults=None, caller=None):
    merged = {}
    for layer in (provider_defaults, category_defaults, caller):
        for key, value in (layer or {}).items():
            if value is not None:
                merged[key] = value
    return merged


@dataclass
class VMConfig:
    instance_type: str = None
    vcpus: int = None
    memory_gb: int = None
    region: str = None
    memory_optimization: bool = False
    disk_optimization: bool = False
    key_pair_name: str = None
    # Campos específicos do provedor (vpc_id, ami, resource_group, ...)
    attributes: dict = field(default_factory=dict)

    def to_params(self):
        params = dict(self.attributes)
        params.update({
            f.name: getattr(self, f.name) for f in fields(self) if f.name != 'attributes'
        })
        return params


@dataclass
class NetworkConfig:
    region: str = None
    firewall_rules: list = None
    public_ip: bool = None
    attributes: dict = field(default_factory=dict)

    def to_params(self):
        params = dict(self.attributes)
        params['region'] = self.region
        if self.firewall_rules is not None:
            params['firewall_rules'] = list(self.firewall_rules)
        if self.public_ip is not None:
            params['public_ip'] = self.public_ip
        return params


@dataclass
class DiskConfig:
    size_gb: int = None
    region: str = None
    iops: int = None
    attributes: dict = field(default_factory=dict)

    def to_params(self):
        params = dict(self.attributes)
        params.update({'size_gb': self.size_gb, 'region': self.region})
        if self.iops is not None:
            params['iops'] = self.iops
        return params
