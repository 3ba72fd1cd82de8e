from multicloud.extensions import db
from datetime import datetime


class NetworkRecord(db.Model):
    __tablename__ = 'networks'

    id = db.Column(db.Integer, primary_key=True)
    network_id = db.Column(db.String(100), unique=True, nullable=False)
    provider = db.Column(db.String(20), nullable=False)
    region = db.Column(db.String(50))
    config = db.Column(db.JSON, default=dict)
    firewall_rules = db.Column(db.JSON, default=list)
    public_ip = db.Column(db.Boolean, default=False)
    status = db.Column(db.String(20), default='provisioned')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'network_id': self.network_id,
            'provider': self.provider,
            'region': self.region,
            'config': self.config or {},
            'firewall_rules': self.firewall_rules or [],
            'public_ip': self.public_ip,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
