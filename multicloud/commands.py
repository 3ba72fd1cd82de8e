import click
from flask.cli import with_appcontext

from multicloud.extensions import db
# Importa os modelos para que o SQLAlchemy conheça todas as tabelas
from multicloud.models import DiskRecord, NetworkRecord, ProvisioningLog, VirtualMachineRecord  # noqa: F401


@click.command('init-db')
@click.option('--drop', is_flag=True, help='Apaga as tabelas existentes antes de criar.')
@with_appcontext
def init_db_command(drop):
    """Cria as tabelas de recursos e de auditoria."""

    # Cuidado em produção!
    if drop:
        db.drop_all()
        click.echo('Tabelas existentes removidas.')

    db.create_all()
    click.echo('Banco de dados pronto: virtual_machines, networks, disks, provisioning_logs.')
