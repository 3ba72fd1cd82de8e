import logging

from multicloud.construction import policy
from multicloud.construction.specs import merge_fields
from multicloud.exceptions import InvalidBundle
from multicloud.providers.base import normalize_provider


class ConstructionDirector:
    """
    Orquestra o Builder segundo a política de dimensionamento.

    O Builder é um acumulador plano de campos; a sequência fixa aqui existe
    apenas para garantir que cada campo do pacote é definido uma vez antes do
    build(). Um Director por pedido, vinculado a um Builder próprio.

    Parâmetros adicionais aceites (todos opcionais):
        key_pair_name         -> set_key_pair
        vm: {...}             -> campos extras da VM (vpc_id, ami, ...)
        network: {...}        -> sobrescreve defaults de rede; firewall_rules e
                                 public_ip só são aplicados se informados
        disk: {...}           -> sobrescreve defaults de disco; size_gb e iops

    Rede e disco usam sempre o argumento region; um 'region' dentro de
    network ou disk é descartado.
    """

    def __init__(self, builder):
        self.builder = builder
        self.logger = logging.getLogger(__name__)

    def set_builder(self, builder):
        self.builder = builder

    def construct(self, category, provider, size, region, params=None):
        """Despacha pela categoria; UnsupportedCategory se desconhecida."""
        constructors = {
            policy.STANDARD: self.construct_standard_vm,
            policy.MEMORY_OPTIMIZED: self.construct_memory_optimized_vm,
            policy.COMPUTE_OPTIMIZED: self.construct_compute_optimized_vm,
        }
        return constructors[policy.normalize_category(category)](provider, size, region, params)

    def construct_standard_vm(self, provider, size, region, params=None):
        return self._construct(policy.STANDARD, provider, size, region, params)

    def construct_memory_optimized_vm(self, provider, size, region, params=None):
        return self._construct(policy.MEMORY_OPTIMIZED, provider, size, region, params)

    def construct_compute_optimized_vm(self, provider, size, region, params=None):
        return self._construct(policy.COMPUTE_OPTIMIZED, provider, size, region, params)

    def _construct(self, category, provider, size, region, params):
        params = params or {}
        provider = normalize_provider(provider)
        if provider != self.builder.provider:
            raise InvalidBundle(
                f"Builder vinculado a '{self.builder.provider}' não pode construir recursos '{provider}'."
            )

        spec = policy.lookup_instance_spec(provider, category, size)
        memory_flag, disk_flag = policy.CATEGORY_FLAGS[category]

        self.logger.debug(
            f"Construindo VM {category}/{size} para {provider}: {spec.instance_type}"
        )

        # 1. Núcleo da VM + flags da categoria
        self.builder.reset()
        self.builder \
            .set_vm_config(spec.instance_type, spec.vcpus, spec.memory_gb, region) \
            .set_memory_optimization(memory_flag) \
            .set_disk_optimization(disk_flag)

        # 2. Key pair e campos extras da VM
        if params.get('key_pair_name'):
            self.builder.set_key_pair(params['key_pair_name'])
        self.builder.set_vm_attributes(params.get('vm') or {})

        # 3. Rede com defaults do provedor
        network_params = dict(params.get('network') or {})
        firewall_rules = network_params.pop('firewall_rules', None)
        public_ip = network_params.pop('public_ip', None)
        network_params.pop('region', None)

        self.builder.set_network_config(
            region, merge_fields(policy.network_defaults(provider), None, network_params)
        )
        if firewall_rules is not None:
            self.builder.set_firewall_rules(firewall_rules)
        if public_ip is not None:
            self.builder.set_public_ip(public_ip)

        # 4. Disco com defaults do provedor e tamanho padrão da categoria
        disk_fields = merge_fields(
            policy.disk_defaults(provider),
            {'size_gb': policy.default_disk_size(category)},
            {key: value for key, value in (params.get('disk') or {}).items() if key != 'region'},
        )
        iops = disk_fields.pop('iops', None)
        size_gb = disk_fields.pop('size_gb')

        self.builder.set_disk_config(size_gb, region, disk_fields)
        if iops:
            self.builder.set_iops(iops)

        return self.builder.build()
