"""
Contratos base dos recursos e da fábrica de famílias de recursos.

Cada provedor (aws, azure, gcp, onpremise) implementa as três variantes de
recurso (VM, Rede, Disco) e uma fábrica que produz a família completa.
As classes aqui são abstratas: instanciá-las diretamente levanta TypeError.
"""
import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from multicloud.exceptions import InvalidBundle, UnsupportedProvider
from multicloud.providers.ids import default_id_generator

SUPPORTED_PROVIDERS = ('aws', 'azure', 'gcp', 'onpremise')


def normalize_provider(provider):
    """Converte o tag do provedor para minúsculas e valida."""
    tag = str(provider or '').strip().lower()
    if tag not in SUPPORTED_PROVIDERS:
        raise UnsupportedProvider(provider)
    return tag


def _iso(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class Cloneable(ABC):
    """Interface do padrão Prototype."""

    @abstractmethod
    def clone(self, id_generator=None):
        pass


class Resource(ABC):

    @property
    @abstractmethod
    def provider(self):
        """Tag do provedor ('aws', 'azure', 'gcp', 'onpremise')."""
        pass

    @abstractmethod
    def to_dict(self):
        """Forma serializada canónica (nomes de campos fazem parte do contrato)."""
        pass


@dataclass
class VirtualMachine(Resource, Cloneable):
    # (atributo, chave serializada) dos campos específicos do provedor
    SERIALIZED_FIELDS = ()

    id: str
    status: str = 'active'
    vcpus: int = None
    memory_gb: int = None
    memory_optimization: bool = False
    disk_optimization: bool = False
    key_pair_name: str = None

    def clone(self, id_generator=None):
        """
        Cópia independente com novo ID. deepcopy garante que o clone não
        partilha nenhum estado mutável com a origem.
        """
        generator = id_generator or default_id_generator
        twin = copy.deepcopy(self)
        twin.id = generator(self.provider, 'vm')
        return twin

    def to_dict(self):
        record = {
            'vm_id': self.id,
            'provider': self.provider,
            'status': self.status,
        }
        for attr, key in self.SERIALIZED_FIELDS:
            record[key] = getattr(self, attr)
        record.update({
            'vcpus': self.vcpus,
            'memory_gb': self.memory_gb,
            'memory_optimization': self.memory_optimization,
            'disk_optimization': self.disk_optimization,
            'key_pair_name': self.key_pair_name,
        })
        return record

    @classmethod
    def from_dict(cls, record):
        # Registros antigos podem não ter flags de otimização nem key pair
        kwargs = {attr: record.get(key) for attr, key in cls.SERIALIZED_FIELDS}
        return cls(
            id=record['vm_id'],
            status=record.get('status') or 'active',
            vcpus=record.get('vcpus'),
            memory_gb=record.get('memory_gb'),
            memory_optimization=bool(record.get('memory_optimization') or False),
            disk_optimization=bool(record.get('disk_optimization') or False),
            key_pair_name=record.get('key_pair_name'),
            **kwargs,
        )


@dataclass
class Network(Resource):
    # (atributo, chave dentro de 'config')
    CONFIG_FIELDS = ()

    id: str
    region: str = None
    firewall_rules: list = field(default_factory=list)
    public_ip: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    def get_config(self):
        return {key: getattr(self, attr) for attr, key in self.CONFIG_FIELDS}

    def to_dict(self):
        return {
            'network_id': self.id,
            'provider': self.provider,
            'region': self.region,
            'config': self.get_config(),
            'firewall_rules': list(self.firewall_rules),
            'public_ip': self.public_ip,
            'status': 'provisioned',
            'created_at': _iso(self.created_at),
        }


@dataclass
class Disk(Resource):
    CONFIG_FIELDS = ()

    id: str
    size_gb: int = None
    region: str = None
    iops: int = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def get_config(self):
        return {key: getattr(self, attr) for attr, key in self.CONFIG_FIELDS}

    def to_dict(self):
        return {
            'disk_id': self.id,
            'provider': self.provider,
            'size_gb': self.size_gb,
            'region': self.region,
            'config': self.get_config(),
            'iops': self.iops,
            'status': 'provisioned',
            'created_at': _iso(self.created_at),
        }


@dataclass(frozen=True)
class ResourceBundle:
    """Pacote {VM, Rede, Disco} produzido por uma passagem de aprovisionamento."""

    vm: VirtualMachine = None
    network: Network = None
    disk: Disk = None

    def is_valid(self):
        return all(member is not None for member in (self.vm, self.network, self.disk))

    @property
    def provider(self):
        return self.vm.provider if self.vm is not None else None

    def validate(self):
        """Levanta InvalidBundle se faltar um membro ou se os provedores divergirem."""
        if not self.is_valid():
            missing = [name for name in ('vm', 'network', 'disk') if getattr(self, name) is None]
            raise InvalidBundle(f"Pacote inválido: faltam {', '.join(missing)}.")

        providers = {self.vm.provider, self.network.provider, self.disk.provider}
        if len(providers) != 1:
            raise InvalidBundle(
                f"Pacote inválido: recursos de provedores diferentes ({', '.join(sorted(providers))})."
            )
        return self


class ResourceFactory(ABC):
    """
    Fábrica abstrata de uma família de recursos compatíveis.

    Os métodos recebem mapas de parâmetros soltos; cada fábrica lê apenas os
    campos relevantes ao seu provedor e ignora os restantes. Campos opcionais
    ausentes ficam None/False.
    """

    def __init__(self, id_generator=None):
        self.id_generator = id_generator or default_id_generator

    @property
    @abstractmethod
    def provider(self):
        pass

    @abstractmethod
    def create_vm(self, params):
        pass

    @abstractmethod
    def create_network(self, params):
        pass

    @abstractmethod
    def create_disk(self, params):
        pass

    def _new_id(self, kind):
        return self.id_generator(self.provider, kind)

    # Helpers de leitura comuns às fábricas concretas

    @staticmethod
    def _first(params, *keys):
        """Primeiro valor não nulo entre as chaves (aliases)."""
        for key in keys:
            value = params.get(key)
            if value is not None:
                return value
        return None

    @staticmethod
    def _network_common(params):
        return {
            'region': params.get('region'),
            'firewall_rules': list(params.get('firewall_rules') or []),
            'public_ip': bool(params.get('public_ip', False)),
        }

    @staticmethod
    def _vm_common(params):
        return {
            'vcpus': params.get('vcpus'),
            'memory_gb': params.get('memory_gb'),
            'memory_optimization': bool(params.get('memory_optimization', False)),
            'disk_optimization': bool(params.get('disk_optimization', False)),
            'key_pair_name': params.get('key_pair_name'),
        }

    @staticmethod
    def _disk_common(params):
        return {
            'size_gb': params.get('size_gb'),
            'region': params.get('region'),
            'iops': params.get('iops'),
        }
