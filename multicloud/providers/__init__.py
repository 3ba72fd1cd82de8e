from multicloud.providers.base import (
    SUPPORTED_PROVIDERS,
    Cloneable,
    Disk,
    Network,
    ResourceBundle,
    ResourceFactory,
    VirtualMachine,
    normalize_provider,
)
from multicloud.providers.aws import AWSDisk, AWSFactory, AWSNetwork, AWSVirtualMachine
from multicloud.providers.azure import AzureDisk, AzureFactory, AzureNetwork, AzureVirtualMachine
from multicloud.providers.gcp import GCPDisk, GCPFactory, GCPNetwork, GCPVirtualMachine
from multicloud.providers.onpremise import (
    OnPremiseDisk,
    OnPremiseFactory,
    OnPremiseNetwork,
    OnPremiseVirtualMachine,
)

# Registro das fábricas concretas (uma por provedor)
FACTORIES = {
    'aws': AWSFactory,
    'azure': AzureFactory,
    'gcp': GCPFactory,
    'onpremise': OnPremiseFactory,
}

# Classes usadas para reconstruir VMs persistidas, por tag do provedor
VM_CLASSES = {
    'aws': AWSVirtualMachine,
    'azure': AzureVirtualMachine,
    'gcp': GCPVirtualMachine,
    'onpremise': OnPremiseVirtualMachine,
}


def get_factory(provider, id_generator=None):
    """Instancia a fábrica do provedor; levanta UnsupportedProvider se desconhecido."""
    return FACTORIES[normalize_provider(provider)](id_generator)
