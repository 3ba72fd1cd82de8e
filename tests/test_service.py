# tests/test_service.py
from datetime import datetime

import pytest

from multicloud.exceptions import PersistenceFailure, PrototypeNotFound, ResourceNotFound, UnsupportedProvider
from multicloud.services import ProvisioningResult

AWS_PARAMS = {
    'vm': {'instance_type': 't3.medium', 'region': 'us-east-1', 'vcpus': 2, 'memory_gb': 4},
    'network': {'region': 'us-east-1', 'vpc_id': 'vpc-1', 'subnet': '10.0.1.0/24'},
    'disk': {'size_gb': 50, 'region': 'us-east-1', 'volume_type': 'gp3'},
}


def _resource_tables(mock_store):
    """Tabelas gravadas, sem contar a auditoria."""
    return [c.args[0] for c in mock_store.insert.call_args_list if c.args[0] != 'provisioning_logs']


def test_provision_persists_vm_network_disk_in_order(service, mock_store):
    result = service.provision('aws', AWS_PARAMS)

    assert isinstance(result, ProvisioningResult)
    assert result.status == 'success'
    assert result.vm_id == 'aws-vm-1'
    assert result.provider == 'aws'
    assert result.error_message is None
    assert _resource_tables(mock_store) == ['virtual_machines', 'networks', 'disks']

    vm_record = mock_store.insert.call_args_list[0].args[1]
    assert vm_record['vm_id'] == 'aws-vm-1'
    assert vm_record['instance_type'] == 't3.medium'


def test_provision_without_disk_fails_before_persistence(service, mock_store):
    params = {'vm': AWS_PARAMS['vm'], 'network': AWS_PARAMS['network']}

    result = service.provision('aws', params)

    assert result.status == 'error'
    assert result.provider == 'aws'
    assert result.vm_id is None
    assert isinstance(result.timestamp, datetime)
    assert 'disk' in result.error_message
    assert _resource_tables(mock_store) == []


def test_provision_unknown_provider_keeps_original_tag(service, mock_store):
    result = service.provision('oracle', AWS_PARAMS)

    assert result.status == 'error'
    assert result.provider == 'oracle'
    assert "'oracle'" in result.error_message
    assert _resource_tables(mock_store) == []


def test_provision_normalizes_provider_case(service):
    result = service.provision('AWS', AWS_PARAMS)

    assert result.status == 'success'
    assert result.provider == 'aws'


def test_persistence_failure_becomes_error_result(service, mock_store):
    def insert(table, record):
        if table == 'networks':
            raise PersistenceFailure('networks', 'disk full')
        return record

    mock_store.insert.side_effect = insert

    result = service.provision('aws', AWS_PARAMS)

    assert result.status == 'error'
    assert 'networks' in result.error_message
    # Sem compensação: a VM já gravada permanece
    assert _resource_tables(mock_store) == ['virtual_machines', 'networks']


def test_every_request_is_audited_with_sanitized_params(service, mock_store):
    params = dict(AWS_PARAMS, credentials={'api_key': 'segredo'}, password='123')

    service.provision('aws', params)

    table, log = mock_store.insert.call_args_list[-1].args
    assert table == 'provisioning_logs'
    assert log['status'] == 'success'
    assert log['vm_id'] == 'aws-vm-1'
    assert log['request_params']['password'] == '***REDACTED***'
    assert log['request_params']['credentials'] == '***REDACTED***'
    assert log['request_params']['vm'] == AWS_PARAMS['vm']


def test_audit_failure_does_not_change_result(service, mock_store):
    def insert(table, record):
        if table == 'provisioning_logs':
            raise PersistenceFailure('provisioning_logs', 'read-only')
        return record

    mock_store.insert.side_effect = insert

    assert service.provision('aws', AWS_PARAMS).status == 'success'


def test_provision_with_builder(service, mock_store):
    result = service.provision_with_builder(
        'aws', 'memory-optimized', 'medium', 'us-east-1', {'disk': {'size_gb': 500}},
    )

    assert result.status == 'success'
    assert result.provider == 'aws'

    vm_record = mock_store.insert.call_args_list[0].args[1]
    disk_record = mock_store.insert.call_args_list[2].args[1]
    assert vm_record['instance_type'] == 'r5.xlarge'
    assert vm_record['memory_optimization'] is True
    assert disk_record['size_gb'] == 500


@pytest.mark.parametrize('provider, category', [
    ('oracle', 'standard'),
    ('aws', 'gpu-optimized'),
])
def test_provision_with_builder_rejects_unknown_inputs(service, mock_store, provider, category):
    result = service.provision_with_builder(provider, category, 'small', 'r')

    assert result.status == 'error'
    assert result.provider == provider
    assert _resource_tables(mock_store) == []


def test_unexpected_error_is_converted(service, mock_store):
    mock_store.insert.side_effect = RuntimeError('conexão perdida')

    result = service.provision('aws', AWS_PARAMS)

    assert result.status == 'error'
    assert 'conexão perdida' in result.error_message


def test_prototype_flow(service, mock_store):
    template = service.register_prototype('base-web', 'gcp', {'machine_type': 'e2-standard-2', 'zone': 'z'})

    result = service.provision_from_prototype('base-web')

    assert result.status == 'success'
    assert result.provider == 'gcp'
    assert result.vm_id != template.id
    assert _resource_tables(mock_store) == ['virtual_machines']
    assert service.list_prototypes() == ['base-web']


def test_provision_from_unknown_prototype(service, mock_store):
    result = service.provision_from_prototype('nada')

    assert result.status == 'error'
    assert 'nada' in result.error_message
    assert _resource_tables(mock_store) == []


def test_register_prototype_unknown_provider(service):
    with pytest.raises(UnsupportedProvider):
        service.register_prototype('x', 'oracle', {})


def test_remove_prototype(service):
    service.register_prototype('tmp', 'aws', {})
    service.remove_prototype('tmp')

    with pytest.raises(PrototypeNotFound):
        service.remove_prototype('tmp')


def test_get_vm_reconstructs_record(service, mock_store):
    mock_store.find_vm.return_value = {
        'vm_id': 'azure-vm-9', 'provider': 'azure', 'status': 'active',
        'vm_size': 'D2s_v3', 'region': 'westeurope', 'resource_group': 'rg', 'image': 'ubuntu',
        'vcpus': 2, 'memory_gb': 8,
    }

    vm = service.get_vm('azure-vm-9')

    assert vm.provider == 'azure'
    assert vm.location == 'westeurope'
    assert vm.memory_optimization is False
    assert vm.key_pair_name is None


def test_register_prototype_from_vm(service, mock_store):
    mock_store.find_vm.return_value = {'vm_id': 'aws-vm-77', 'provider': 'aws', 'instance_type': 'c5.large'}

    service.register_prototype_from_vm('from-db', 'aws-vm-77')
    result = service.provision_from_prototype('from-db')

    assert result.status == 'success'
    assert result.vm_id != 'aws-vm-77'


def test_get_vm_missing_raises(service):
    with pytest.raises(ResourceNotFound):
        service.get_vm('nao-existe')


def test_get_logs_uses_default_limit(service, mock_store):
    service.get_logs()
    mock_store.list_logs.assert_called_once_with(100)


def test_result_to_dict():
    result = ProvisioningResult.failure('aws', 'falhou')
    data = result.to_dict()

    assert data['status'] == 'error'
    assert data['vm_id'] is None
    assert data['error_message'] == 'falhou'
    assert datetime.fromisoformat(data['timestamp']) == result.timestamp


@pytest.mark.parametrize('bad_params', ['abc', [1, 2]])
def test_provision_with_builder_non_mapping_params_is_error_result(service, mock_store, bad_params):
    result = service.provision_with_builder('aws', 'standard', 'small', 'r', bad_params)

    assert result.status == 'error'
    assert result.provider == 'aws'
    assert "'params'" in result.error_message
    assert _resource_tables(mock_store) == []

    table, log = mock_store.insert.call_args_list[-1].args
    assert table == 'provisioning_logs'
    assert log['request_params']['vm_type'] == 'standard'


def test_provision_non_mapping_params_is_error_result(service, mock_store):
    result = service.provision('aws', ['vm', 'network', 'disk'])

    assert result.status == 'error'
    assert _resource_tables(mock_store) == []


def test_sensitive_keys_inside_lists_are_masked(service, mock_store):
    params = dict(AWS_PARAMS, vm=dict(AWS_PARAMS['vm'], extras=[{'password': 'x', 'tag': 'web'}]))

    service.provision('aws', params)

    _, log = mock_store.insert.call_args_list[-1].args
    assert log['request_params']['vm']['extras'] == [{'password': '***REDACTED***', 'tag': 'web'}]
