from multicloud.persistence.reconstruct import reconstruct_vm
from multicloud.persistence.store import ResourceStore, SQLAlchemyResourceStore
