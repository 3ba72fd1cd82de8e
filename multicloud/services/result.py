from dataclasses import dataclass
from datetime import datetime

SUCCESS = 'success'
ERROR = 'error'


@dataclass(frozen=True)
class ProvisioningResult:
    """Resultado imutável de um pedido de aprovisionamento."""

    status: str
    vm_id: str
    provider: str
    timestamp: datetime
    error_message: str = None

    @classmethod
    def success(cls, vm_id, provider):
        return cls(SUCCESS, vm_id, provider, datetime.utcnow())

    @classmethod
    def failure(cls, provider, error_message):
        return cls(ERROR, None, provider, datetime.utcnow(), error_message)

    @property
    def is_success(self):
        return self.status == SUCCESS

    def to_dict(self):
        return {
            'status': self.status,
            'vm_id': self.vm_id,
            'provider': self.provider,
            'timestamp': self.timestamp.isoformat(),
            'error_message': self.error_message,
        }
