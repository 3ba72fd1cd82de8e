from flask import Blueprint, jsonify
from flask_cors import cross_origin
from datetime import datetime
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from multicloud.extensions import db
from multicloud.providers import SUPPORTED_PROVIDERS
from multicloud.services import provisioning_service

main_bp = Blueprint('main', __name__)


@main_bp.route('/', methods=['GET'])
def index():
    return jsonify({
        "project": "Multicloud Provisioning API",
        "status": "online",
        "providers": list(SUPPORTED_PROVIDERS),
        "documentation": "/docs"
    }), 200


@main_bp.route('/health', methods=['GET'])
@main_bp.route('/api/health', methods=['GET', 'OPTIONS'])
@cross_origin()
def health_check():
    """
    Verifica a saúde da API e da base de dados.
    """
    status_report = {
        "status": "online",     # Estado geral da API (Python)
        "database": "unknown",  # Estado da base de dados
        "details": {
            "prototypes": len(provisioning_service.list_prototypes()),
        },
        "server_time": datetime.utcnow().isoformat()
    }

    # 1. TESTE DE BANCO DE DADOS
    try:
        db.session.execute(text('SELECT 1'))
        status_report['database'] = "connected"
    except SQLAlchemyError as e:
        status_report['status'] = "unstable"
        status_report['database'] = "disconnected"
        status_report['details']['db_error'] = str(e)

    return jsonify(status_report), 200
