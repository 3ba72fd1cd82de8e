from flask import Blueprint, jsonify, request, current_app
from flask_cors import cross_origin

from multicloud.construction.policy import DEFAULT_SIZE
from multicloud.exceptions import PersistenceFailure
# Importamos a instância do Serviço Unificado (Facade)
from multicloud.services import provisioning_service

bp = Blueprint('provisioning', __name__)


def _result_response(result):
    """201 com o resultado quando bem-sucedido, 500 com o resultado de erro."""
    body = result.to_dict()
    if result.is_success:
        return jsonify({'success': True, 'message': 'Recursos aprovisionados com sucesso.', 'data': body}), 201
    return jsonify({'success': False, 'error': result.error_message, 'data': body}), 500


@bp.route('/provision', methods=['POST', 'OPTIONS'])
@cross_origin()
def provision():
    """
    Aprovisiona VM, Rede e Disco diretamente pela fábrica do provedor.
    ---
    tags:
      - Aprovisionamento
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - provider
            - params
          properties:
            provider:
              type: string
              enum: [aws, azure, gcp, onpremise]
            params:
              type: object
              description: Secções 'vm', 'network' e 'disk' com os campos do provedor
          example:
            provider: aws
            params:
              vm: {instance_type: t3.medium, region: us-east-1, vcpus: 2, memory_gb: 4}
              network: {region: us-east-1, vpc_id: vpc-123, subnet: 10.0.1.0/24}
              disk: {size_gb: 50, region: us-east-1, volume_type: gp3}
    responses:
      201:
        description: Recursos criados e persistidos
      400:
        description: Campos obrigatórios ausentes
      500:
        description: Falha no aprovisionamento (resultado de erro)
    """
    data = request.get_json(silent=True) or {}
    provider = data.get('provider')
    params = data.get('params')

    if not provider or not params:
        return jsonify({'success': False, 'error': "Campos obrigatórios ausentes: 'provider' e 'params'."}), 400

    result = provisioning_service.provision(provider, params)
    return _result_response(result)


@bp.route('/provision/builder', methods=['POST', 'OPTIONS'])
@cross_origin()
def provision_with_builder():
    """
    Aprovisiona usando Builder + Director (tamanhos e defaults pela política).
    ---
    tags:
      - Aprovisionamento
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - provider
            - vm_type
            - region
          properties:
            provider:
              type: string
              enum: [aws, azure, gcp, onpremise]
            vm_type:
              type: string
              enum: [standard, memory-optimized, compute-optimized]
            size:
              type: string
              enum: [small, medium, large]
              default: small
            region:
              type: string
            params:
              type: object
              description: Sobreposições opcionais (key_pair_name, vm, network, disk)
          example:
            provider: aws
            vm_type: memory-optimized
            size: medium
            region: us-east-1
            params:
              key_pair_name: my-key
              network: {firewall_rules: [allow-ssh], public_ip: true}
              disk: {size_gb: 300, iops: 3000}
    responses:
      201:
        description: Recursos criados e persistidos
      400:
        description: Campos obrigatórios ausentes
      500:
        description: Falha no aprovisionamento (resultado de erro)
    """
    data = request.get_json(silent=True) or {}

    # 1. Validação de Campos Obrigatórios
    missing = [field for field in ('provider', 'vm_type', 'region') if not data.get(field)]
    if missing:
        return jsonify({'success': False, 'error': f"Campos obrigatórios ausentes: {', '.join(missing)}."}), 400

    # 2. Aprovisionamento guiado pela política
    result = provisioning_service.provision_with_builder(
        data['provider'],
        data['vm_type'],
        data.get('size') or DEFAULT_SIZE,
        data['region'],
        data.get('params') or {},
    )
    return _result_response(result)


@bp.route('/provision/prototype', methods=['POST', 'OPTIONS'])
@cross_origin()
def provision_from_prototype():
    """
    Aprovisiona uma VM clonando um protótipo registrado.
    ---
    tags:
      - Aprovisionamento
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - prototype
          properties:
            prototype:
              type: string
              description: Nome do protótipo registrado
    responses:
      201:
        description: Clone criado e persistido
      400:
        description: Nome do protótipo ausente
      500:
        description: Protótipo inexistente ou falha de persistência
    """
    data = request.get_json(silent=True) or {}
    name = data.get('prototype')

    if not name:
        return jsonify({'success': False, 'error': "Campo obrigatório ausente: 'prototype'."}), 400

    result = provisioning_service.provision_from_prototype(name)
    return _result_response(result)


@bp.route('/vms', methods=['GET', 'OPTIONS'])
@cross_origin()
def list_vms():
    """
    Lista as VMs persistidas (mais recentes primeiro).
    ---
    tags:
      - Consultas
    responses:
      200:
        description: Lista de VMs
      500:
        description: Erro ao consultar a base de dados
    """
    try:
        vms = provisioning_service.get_all_vms()
    except PersistenceFailure as e:
        current_app.logger.error(f"Erro ao listar VMs: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500

    return jsonify({'success': True, 'count': len(vms), 'data': vms}), 200


@bp.route('/vms/<vm_id>', methods=['GET', 'OPTIONS'])
@cross_origin()
def get_vm(vm_id):
    """
    Devolve a VM reconstruída a partir do registro persistido.
    ---
    tags:
      - Consultas
    parameters:
      - in: path
        name: vm_id
        type: string
        required: true
    responses:
      200:
        description: VM encontrada
      404:
        description: VM inexistente
    """
    # ResourceNotFound é convertido em 404 pelo handler global
    vm = provisioning_service.get_vm(vm_id)
    return jsonify({'success': True, 'data': vm.to_dict()}), 200


@bp.route('/logs', methods=['GET', 'OPTIONS'])
@cross_origin()
def list_logs():
    """
    Registros de auditoria mais recentes.
    ---
    tags:
      - Consultas
    parameters:
      - in: query
        name: limit
        type: integer
        required: false
    responses:
      200:
        description: Lista de registros
      500:
        description: Erro ao consultar a base de dados
    """
    limit = request.args.get('limit', type=int)

    try:
        logs = provisioning_service.get_logs(limit)
    except PersistenceFailure as e:
        current_app.logger.error(f"Erro ao listar logs: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500

    return jsonify({'success': True, 'count': len(logs), 'data': logs}), 200
