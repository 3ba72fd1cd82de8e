from abc import ABC, abstractmethod
from dataclasses import fields

from multicloud.construction.specs import DiskConfig, NetworkConfig, VMConfig
from multicloud.providers import AWSFactory, AzureFactory, GCPFactory, OnPremiseFactory
from multicloud.providers.base import ResourceBundle, normalize_provider

_VM_CORE_FIELDS = {f.name for f in fields(VMConfig) if f.name != 'attributes'}


class ResourceBuilder(ABC):
    """
    Acumulador mutável de configuração de VM, Rede e Disco.

    A criação final é delegada à fábrica do provedor vinculado. Não é seguro
    para reutilização concorrente: usar uma instância por pedido e chamar
    reset() entre pacotes. build() não valida nada; isso cabe ao Director ou
    ao serviço.
    """

    def __init__(self, id_generator=None):
        self.factory = self.create_factory(id_generator)
        self.reset()

    @abstractmethod
    def create_factory(self, id_generator=None):
        """Fábrica concreta à qual este builder está vinculado."""
        pass

    @property
    def provider(self):
        return self.factory.provider

    def reset(self):
        self.vm_config = VMConfig()
        self.network_config = NetworkConfig()
        self.disk_config = DiskConfig()
        return self

    # --- VM ---

    def set_vm_config(self, instance_type, vcpus, memory_gb, region):
        self.vm_config.instance_type = instance_type
        self.vm_config.vcpus = vcpus
        self.vm_config.memory_gb = memory_gb
        self.vm_config.region = region
        return self

    def set_memory_optimization(self, enabled):
        self.vm_config.memory_optimization = bool(enabled)
        return self

    def set_disk_optimization(self, enabled):
        self.vm_config.disk_optimization = bool(enabled)
        return self

    def set_key_pair(self, key_pair_name):
        self.vm_config.key_pair_name = key_pair_name
        return self

    def set_vm_attributes(self, attributes):
        """Campos extras do chamador; sobrescrevem os campos do núcleo com o mesmo nome."""
        for key, value in (attributes or {}).items():
            if key in _VM_CORE_FIELDS:
                setattr(self.vm_config, key, value)
            else:
                self.vm_config.attributes[key] = value
        return self

    # --- Rede ---

    def set_network_config(self, region, attributes=None):
        self.network_config.region = region
        self.network_config.attributes = dict(attributes or {})
        return self

    def set_firewall_rules(self, rules):
        self.network_config.firewall_rules = list(rules or [])
        return self

    def set_public_ip(self, enabled):
        self.network_config.public_ip = bool(enabled)
        return self

    # --- Disco ---

    def set_disk_config(self, size_gb, region, attributes=None):
        self.disk_config.size_gb = size_gb
        self.disk_config.region = region
        self.disk_config.attributes = dict(attributes or {})
        return self

    def set_iops(self, iops):
        self.disk_config.iops = iops
        return self

    def build(self):
        return ResourceBundle(
            vm=self.factory.create_vm(self.vm_config.to_params()),
            network=self.factory.create_network(self.network_config.to_params()),
            disk=self.factory.create_disk(self.disk_config.to_params()),
        )


class AWSResourceBuilder(ResourceBuilder):
    def create_factory(self, id_generator=None):
        return AWSFactory(id_generator)


class AzureResourceBuilder(ResourceBuilder):
    def create_factory(self, id_generator=None):
        return AzureFactory(id_generator)


class GCPResourceBuilder(ResourceBuilder):
    def create_factory(self, id_generator=None):
        return GCPFactory(id_generator)


class OnPremiseResourceBuilder(ResourceBuilder):
    def create_factory(self, id_generator=None):
        return OnPremiseFactory(id_generator)


BUILDERS = {
    'aws': AWSResourceBuilder,
    'azure': AzureResourceBuilder,
    'gcp': GCPResourceBuilder,
    'onpremise': OnPremiseResourceBuilder,
}


def get_builder(provider, id_generator=None):
    """Builder novo para o provedor (um por pedido)."""
    return BUILDERS[normalize_provider(provider)](id_generator)
