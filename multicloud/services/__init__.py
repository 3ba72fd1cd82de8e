from multicloud.services.provisioning_service import ProvisioningService
from multicloud.services.result import ProvisioningResult

# Instância global (Singleton), configurada via init_app no create_app
provisioning_service = ProvisioningService()
