from multicloud.construction.builder import (
    BUILDERS,
    AWSResourceBuilder,
    AzureResourceBuilder,
    GCPResourceBuilder,
    OnPremiseResourceBuilder,
    ResourceBuilder,
    get_builder,
)
from multicloud.construction.director import ConstructionDirector
from multicloud.construction.specs import DiskConfig, NetworkConfig, VMConfig, merge_fields
