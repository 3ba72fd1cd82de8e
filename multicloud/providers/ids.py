import itertools
import threading
import uuid


class UUIDIdGenerator:
    """
    Gerador padrão de identificadores: '<provedor>-<tipo>-<uuid4 hex>'.
    uuid4 garante IDs distintos mesmo com várias threads a gerar em paralelo.
    """

    def __call__(self, provider, kind):
        return f"{provider}-{kind}-{uuid.uuid4().hex[:16]}"


class SequentialIdGenerator:
    """
    Gerador determinístico ('aws-vm-1', 'aws-net-2', ...).
    Usado nos testes para poder afirmar sobre IDs concretos.
    """

    def __init__(self, start=1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self, provider, kind):
        with self._lock:
            value = next(self._counter)
        return f"{provider}-{kind}-{value}"


default_id_generator = UUIDIdGenerator()
