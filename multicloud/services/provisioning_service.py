import logging

from multicloud.construction import ConstructionDirector, get_builder
from multicloud.exceptions import (
    MissingRequiredResource,
    PrototypeNotFound,
    ProvisioningError,
    ResourceNotFound,
)
from multicloud.persistence import SQLAlchemyResourceStore, reconstruct_vm
from multicloud.providers import ResourceBundle, get_factory
from multicloud.providers.ids import default_id_generator
from multicloud.registry import PrototypeRegistry
from multicloud.services.audit import DEFAULT_SENSITIVE_KEYS, ProvisioningAuditor
from multicloud.services.result import ProvisioningResult

REQUIRED_SECTIONS = ('vm', 'network', 'disk')


class ProvisioningService:
    """
    Serviço de aprovisionamento (Facade) invocado pela camada HTTP.

    Expõe os três modos de construção:
    1. Direto pela fábrica do provedor (provision)
    2. Builder + Director guiado por política (provision_with_builder)
    3. Clonagem de protótipo registrado (provision_from_prototype)

    Os três devolvem sempre um ProvisioningResult; erros do núcleo e do
    armazenamento são convertidos em resultado com status 'error'.
    """

    def __init__(self, store=None, registry=None, id_generator=None):
        # Inicializa vazio para suportar o padrão de Factory do Flask
        self.config = None
        self.id_generator = id_generator or default_id_generator
        self.store = store
        self.registry = registry or PrototypeRegistry(self.id_generator)
        self.auditor = ProvisioningAuditor(store)
        self.log_limit = 100
        self.logger = logging.getLogger(__name__)

    def init_app(self, app):
        """
        Carrega as configurações do Flask e cria o registro de protótipos.
        Chamado em multicloud/__init__.py.
        """
        self.config = app.config
        if self.store is None:
            self.store = SQLAlchemyResourceStore()

        self.registry = PrototypeRegistry(self.id_generator)
        self.auditor = ProvisioningAuditor(
            self.store,
            app.config.get('SENSITIVE_PARAM_KEYS', DEFAULT_SENSITIVE_KEYS),
        )
        self.log_limit = app.config.get('PROVISIONING_LOG_LIMIT', 100)

    def _require_store(self):
        if self.store is None:
            raise RuntimeError("ProvisioningService não inicializado. Chame init_app(app) primeiro.")
        return self.store

    # -------------------------------------------------------------
    # --- Modos de aprovisionamento ---
    # -------------------------------------------------------------

    def provision(self, provider, params):
        """
        Aprovisiona a família completa (VM + Rede + Disco) pela fábrica do provedor.
        params deve conter as secções 'vm', 'network' e 'disk'.
        """
        params = params or {}
        self.auditor.log_request(provider, params)

        def build():
            factory = get_factory(provider, self.id_generator)
            if not isinstance(params, dict):
                raise ProvisioningError("Parâmetros inválidos: 'params' deve ser um objeto.")

            missing = [section for section in REQUIRED_SECTIONS if params.get(section) is None]
            if missing:
                raise MissingRequiredResource(missing)

            return ResourceBundle(
                vm=factory.create_vm(params['vm']),
                network=factory.create_network(params['network']),
                disk=factory.create_disk(params['disk']),
            )

        result = self._run(provider, build)
        self.auditor.log_result(result, params)
        return result

    def provision_with_builder(self, provider, category, size, region, params=None):
        """O Director define vCPU, memória, flags e defaults a partir da política."""
        params = params or {}
        request = dict(params) if isinstance(params, dict) else {'params': params}
        request.update(vm_type=category, size=size, region=region)
        self.auditor.log_request(provider, request)

        def build():
            if not isinstance(params, dict):
                raise ProvisioningError("Parâmetros adicionais inválidos: 'params' deve ser um objeto.")

            # Builder e Director novos por pedido: o Builder não é thread-safe
            builder = get_builder(provider, self.id_generator)
            director = ConstructionDirector(builder)
            return director.construct(category, provider, size, region, params)

        result = self._run(provider, build)
        self.auditor.log_result(result, request)
        return result

    def provision_from_prototype(self, name):
        request = {'source': 'prototype-clone', 'prototype': name}
        self.auditor.log_request(None, request)

        provider = None
        try:
            vm = self.registry.clone(name)
            provider = vm.provider
            self._require_store().insert('virtual_machines', vm.to_dict())
            result = ProvisioningResult.success(vm.id, vm.provider)
        except ProvisioningError as e:
            result = ProvisioningResult.failure(provider, str(e))
        except Exception as e:
            self.logger.exception(f"Erro inesperado ao clonar protótipo '{name}'")
            result = ProvisioningResult.failure(provider, str(e))

        self.auditor.log_result(result, request)
        return result

    def _run(self, provider, build):
        try:
            bundle = build().validate()
            self._save_bundle(bundle)
            return ProvisioningResult.success(bundle.vm.id, bundle.provider)
        except ProvisioningError as e:
            return ProvisioningResult.failure(provider, str(e))
        except Exception as e:
            self.logger.exception(f"Erro inesperado no aprovisionamento ({provider})")
            return ProvisioningResult.failure(provider, str(e))

    def _save_bundle(self, bundle):
        """
        Grava VM, Rede e Disco em sequência. Sem compensação: se uma gravação
        falhar, as anteriores permanecem e o erro sobe com o nome da tabela.
        """
        store = self._require_store()
        store.insert('virtual_machines', bundle.vm.to_dict())
        store.insert('networks', bundle.network.to_dict())
        store.insert('disks', bundle.disk.to_dict())

    # ------------------------------------
    # --- Protótipos ---
    # ------------------------------------

    def register_prototype(self, name, provider, vm_params):
        """Cria a VM template com a fábrica do provedor e registra-a."""
        template = get_factory(provider, self.id_generator).create_vm(vm_params or {})
        self.registry.register(name, template)
        return template

    def register_prototype_from_vm(self, name, vm_id):
        template = self.get_vm(vm_id)
        self.registry.register(name, template)
        return template

    def list_prototypes(self):
        return self.registry.list_names()

    def remove_prototype(self, name):
        if not self.registry.unregister(name):
            raise PrototypeNotFound(name)

    # ---------------------------------
    # --- Leitura ---
    # ---------------------------------

    def get_all_vms(self):
        return self._require_store().list_vms()

    def get_vm(self, vm_id):
        """Reconstrói a VM persistida como objeto do provedor."""
        record = self._require_store().find_vm(vm_id)
        if not record:
            raise ResourceNotFound(vm_id)
        return reconstruct_vm(record)

    def get_logs(self, limit=None):
        return self._require_store().list_logs(limit or self.log_limit)
