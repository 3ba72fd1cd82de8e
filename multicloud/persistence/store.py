import logging
from abc import ABC, abstractmethod
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from multicloud.exceptions import PersistenceFailure
from multicloud.extensions import db
from multicloud.models import DiskRecord, NetworkRecord, ProvisioningLog, VirtualMachineRecord


class ResourceStore(ABC):
    """
    Colaborador de persistência usado pelo serviço de aprovisionamento.
    Toda falha é levantada como PersistenceFailure com o nome da tabela.
    """

    @abstractmethod
    def insert(self, table, record):
        pass

    @abstractmethod
    def find_vm(self, vm_id):
        """Registro da VM ou None."""
        pass

    @abstractmethod
    def list_vms(self):
        pass

    @abstractmethod
    def list_logs(self, limit=100):
        pass


class SQLAlchemyResourceStore(ResourceStore):

    MODELS = {
        'virtual_machines': VirtualMachineRecord,
        'networks': NetworkRecord,
        'disks': DiskRecord,
        'provisioning_logs': ProvisioningLog,
    }

    def __init__(self, session=None):
        self._session = session
        self.logger = logging.getLogger(__name__)

    @property
    def session(self):
        return self._session or db.session

    def insert(self, table, record):
        model = self.MODELS.get(table)
        if model is None:
            raise PersistenceFailure(table, 'tabela desconhecida')

        # Só as colunas conhecidas; o restante da forma canónica é ignorado
        columns = {column.name for column in model.__table__.columns} - {'id'}
        values = {key: value for key, value in record.items() if key in columns}
        for key in ('created_at', 'timestamp'):
            if isinstance(values.get(key), str):
                values[key] = datetime.fromisoformat(values[key])

        try:
            row = model(**values)
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            self.logger.error(f"Erro ao gravar em {table}: {e}")
            raise PersistenceFailure(table, str(e)) from e

        return row.to_dict()

    def find_vm(self, vm_id):
        try:
            row = self.session.query(VirtualMachineRecord).filter_by(vm_id=vm_id).first()
        except SQLAlchemyError as e:
            raise PersistenceFailure('virtual_machines', str(e)) from e
        return row.to_dict() if row else None

    def list_vms(self):
        try:
            rows = self.session.query(VirtualMachineRecord) \
                .order_by(VirtualMachineRecord.created_at.desc(), VirtualMachineRecord.id.desc()) \
                .all()
        except SQLAlchemyError as e:
            raise PersistenceFailure('virtual_machines', str(e)) from e
        return [row.to_dict() for row in rows]

    def list_logs(self, limit=100):
        try:
            rows = self.session.query(ProvisioningLog) \
                .order_by(ProvisioningLog.timestamp.desc(), ProvisioningLog.id.desc()) \
                .limit(limit) \
                .all()
        except SQLAlchemyError as e:
            raise PersistenceFailure('provisioning_logs', str(e)) from e
        return [row.to_dict() for row in rows]
