from multicloud.models.virtual_machine import VirtualMachineRecord
from multicloud.models.network import NetworkRecord
from multicloud.models.disk import DiskRecord
from multicloud.models.provisioning_log import ProvisioningLog
