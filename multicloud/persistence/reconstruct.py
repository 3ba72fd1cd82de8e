"""Reconstrução de VMs a partir da forma serializada persistida."""
from multicloud.providers import VM_CLASSES
from multicloud.providers.base import normalize_provider


def reconstruct_vm(record):
    """Devolve a VM do provedor indicado em record['provider']."""
    return VM_CLASSES[normalize_provider(record.get('provider'))].from_dict(record)
