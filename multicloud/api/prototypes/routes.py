from flask import Blueprint, jsonify, request
from flask_cors import cross_origin

from multicloud.services import provisioning_service

bp = Blueprint('prototypes', __name__)


@bp.route('', methods=['GET', 'OPTIONS'])
@cross_origin()
def list_prototypes():
    """
    Lista os nomes dos protótipos registrados.
    ---
    tags:
      - Protótipos
    responses:
      200:
        description: Nomes registrados
    """
    names = provisioning_service.list_prototypes()
    return jsonify({'success': True, 'count': len(names), 'data': names}), 200


@bp.route('', methods=['POST'])
@cross_origin()
def register_prototype():
    """
    Registra um protótipo a partir de parâmetros de VM ou de uma VM existente.
    ---
    tags:
      - Protótipos
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - name
          properties:
            name:
              type: string
            provider:
              type: string
              description: Obrigatório junto com 'vm'
            vm:
              type: object
              description: Campos da VM template
            vm_id:
              type: string
              description: Alternativa a provider+vm; usa uma VM persistida
    responses:
      201:
        description: Protótipo registrado (substitui um anterior com o mesmo nome)
      400:
        description: Dados inválidos ou provedor não suportado
      404:
        description: VM de origem inexistente
    """
    data = request.get_json(silent=True) or {}
    name = data.get('name')

    if not name:
        return jsonify({'success': False, 'error': "Campo obrigatório ausente: 'name'."}), 400

    # Erros de domínio (provedor, VM inexistente) são tratados pelos handlers globais
    if data.get('vm_id'):
        template = provisioning_service.register_prototype_from_vm(name, data['vm_id'])
    elif data.get('provider') and data.get('vm') is not None:
        template = provisioning_service.register_prototype(name, data['provider'], data['vm'])
    else:
        return jsonify({'success': False, 'error': "Informe 'provider' e 'vm', ou 'vm_id'."}), 400

    return jsonify({
        'success': True,
        'message': f"Protótipo '{name}' registrado.",
        'data': template.to_dict()
    }), 201


@bp.route('/<name>', methods=['DELETE', 'OPTIONS'])
@cross_origin()
def remove_prototype(name):
    """
    Remove um protótipo registrado.
    ---
    tags:
      - Protótipos
    parameters:
      - in: path
        name: name
        type: string
        required: true
    responses:
      200:
        description: Protótipo removido
      404:
        description: Protótipo inexistente
    """
    provisioning_service.remove_prototype(name)
    return jsonify({'success': True, 'message': f"Protótipo '{name}' removido."}), 200
