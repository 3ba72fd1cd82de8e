from multicloud.extensions import db
from datetime import datetime


class DiskRecord(db.Model):
    __tablename__ = 'disks'

    id = db.Column(db.Integer, primary_key=True)
    disk_id = db.Column(db.String(100), unique=True, nullable=False)
    provider = db.Column(db.String(20), nullable=False)
    size_gb = db.Column(db.Integer)
    region = db.Column(db.String(50))
    config = db.Column(db.JSON, default=dict)
    iops = db.Column(db.Integer, nullable=True)
    status = db.Column(db.String(20), default='provisioned')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'disk_id': self.disk_id,
            'provider': self.provider,
            'size_gb': self.size_gb,
            'region': self.region,
            'config': self.config or {},
            'iops': self.iops,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
