from multicloud.extensions import db
from datetime import datetime


class VirtualMachineRecord(db.Model):
    __tablename__ = 'virtual_machines'

    id = db.Column(db.Integer, primary_key=True)
    vm_id = db.Column(db.String(100), unique=True, nullable=False, index=True)
    provider = db.Column(db.String(20), nullable=False)  # aws, azure, gcp, onpremise
    status = db.Column(db.String(20), default='active')

    # Campos específicos por provedor (nulos quando não se aplicam)
    instance_type = db.Column(db.String(50))   # aws, onpremise
    region = db.Column(db.String(50))          # aws, azure (location)
    vpc_id = db.Column(db.String(100))         # aws
    ami = db.Column(db.String(100))            # aws
    vm_size = db.Column(db.String(50))         # azure
    resource_group = db.Column(db.String(100)) # azure
    image = db.Column(db.String(255))          # azure
    machine_type = db.Column(db.String(50))    # gcp
    zone = db.Column(db.String(50))            # gcp
    disk = db.Column(db.String(255))           # gcp
    project = db.Column(db.String(100))        # gcp
    hypervisor = db.Column(db.String(50))      # onpremise
    datacenter = db.Column(db.String(100))     # onpremise

    vcpus = db.Column(db.Integer)
    memory_gb = db.Column(db.Integer)
    memory_optimization = db.Column(db.Boolean, default=False)
    disk_optimization = db.Column(db.Boolean, default=False)
    key_pair_name = db.Column(db.String(100))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    PROVIDER_COLUMNS = {
        'aws': ('instance_type', 'region', 'vpc_id', 'ami'),
        'azure': ('vm_size', 'region', 'resource_group', 'image'),
        'gcp': ('machine_type', 'zone', 'disk', 'project'),
        'onpremise': ('instance_type', 'hypervisor', 'datacenter'),
    }

    def to_dict(self):
        """Devolve apenas as colunas do provedor do registro, na forma canónica."""
        record = {
            'vm_id': self.vm_id,
            'provider': self.provider,
            'status': self.status,
        }
        for column in self.PROVIDER_COLUMNS.get(self.provider, ()):
            record[column] = getattr(self, column)
        record.update({
            'vcpus': self.vcpus,
            'memory_gb': self.memory_gb,
            'memory_optimization': self.memory_optimization,
            'disk_optimization': self.disk_optimization,
            'key_pair_name': self.key_pair_name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        })
        return record
