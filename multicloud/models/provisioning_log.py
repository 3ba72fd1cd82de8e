from multicloud.extensions import db
from datetime import datetime


class ProvisioningLog(db.Model):
    """Registro de auditoria de cada pedido de aprovisionamento."""
    __tablename__ = 'provisioning_logs'

    id = db.Column(db.Integer, primary_key=True)
    vm_id = db.Column(db.String(100), nullable=True)  # nulo quando o pedido falhou
    provider = db.Column(db.String(20))
    request_params = db.Column(db.JSON, default=dict)
    status = db.Column(db.String(20), nullable=False)  # success | error
    error_message = db.Column(db.Text, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'vm_id': self.vm_id,
            'provider': self.provider,
            'request_params': self.request_params or {},
            'status': self.status,
            'error_message': self.error_message,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }
