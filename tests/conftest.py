import pytest
from unittest.mock import MagicMock
from multicloud import create_app
from multicloud.config import TestingConfig
from multicloud.extensions import db
from multicloud.providers.ids import SequentialIdGenerator


@pytest.fixture
def app():
    """
    Cria a instância do Flask configurada para TESTES.
    1. Usa 'TestingConfig' para garantir modo de teste.
    2. Usa banco SQLite em memória (rápido e isolado).
    3. Cria e destroi as tabelas a cada teste.
    """
    app = create_app(TestingConfig)

    # Reforça configurações críticas (caso o TestingConfig falhe)
    app.config.update({
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    # Contexto da Aplicação
    with app.app_context():
        # --- CRUCIAL: Importar Models aqui para o SQLAlchemy criar as tabelas ---
        from multicloud.models import DiskRecord, NetworkRecord, ProvisioningLog, VirtualMachineRecord

        db.create_all()  # Cria o schema no SQLite em memória

        yield app

        db.session.remove()  # Fecha a sessão do SQLAlchemy
        db.drop_all()        # Limpa o banco para o próximo teste


@pytest.fixture
def client(app):
    """
    Client HTTP simulado para fazer requisições (POST, GET) nas rotas.
    Ex: client.post('/api/provision', ...)
    """
    return app.test_client()


@pytest.fixture
def app_context(app):
    """
    Fixture de compatibilidade. Alguns testes pedem apenas o contexto ativo.
    """
    with app.app_context():
        yield


@pytest.fixture
def id_generator():
    """IDs determinísticos: aws-vm-1, aws-net-2, ..."""
    return SequentialIdGenerator()


@pytest.fixture
def mock_store():
    """
    Armazenamento falso. insert devolve o próprio registro, como o real.
    """
    store = MagicMock()
    store.insert.side_effect = lambda table, record: record
    store.find_vm.return_value = None
    store.list_vms.return_value = []
    store.list_logs.return_value = []
    return store


@pytest.fixture
def service(mock_store, id_generator):
    """
    ProvisioningService isolado, com o armazenamento falso já injetado.
    """
    from multicloud.services import ProvisioningService

    return ProvisioningService(store=mock_store, id_generator=id_generator)
