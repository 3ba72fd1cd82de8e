from flask import Flask, jsonify
import flask
import markupsafe
# Patch para compatibilidade do Flasgger com Flask 3.0+
flask.Markup = markupsafe.Markup

from flasgger import Swagger
from multicloud.config import DevelopmentConfig

from multicloud.extensions import db, migrate, cors
from multicloud.exceptions import PrototypeNotFound, ProvisioningError, ResourceNotFound
import logging

from multicloud.api.main import main_bp


def create_app(config_class=DevelopmentConfig):
    """Factory do aplicativo Flask"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # REGISTRO DE COMANDOS
    from multicloud.commands import init_db_command
    app.cli.add_command(init_db_command)

    # Configuração do Swagger
    swagger_config = {
        "headers": [],
        "specs": [
            {
                "endpoint": 'apispec',
                "route": '/apispec.json',
                "rule_filter": lambda rule: True,
                "model_filter": lambda tag: True,
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/docs"
    }

    Swagger(app, config=swagger_config)

    # 1. INICIALIZAR EXTENSÕES (inclui o serviço de aprovisionamento)
    init_extensions(app)

    # 2. CONFIGURAR LOGGING
    configure_logging(app)

    # 3. REGISTRAR ROTAS
    register_blueprints(app)

    # Registra a rota raiz (Health Check / Main)
    app.register_blueprint(main_bp)

    # 4. TRATAMENTO DE ERROS
    register_error_handlers(app)

    return app


def init_extensions(app):
    """Inicializa todas as extensões do Flask."""
    db.init_app(app)
    migrate.init_app(app, db)

    cors.init_app(app, resources={r"/*": {
        "origins": app.config.get('CORS_ORIGINS', []),
        "methods": ["GET", "POST", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"],
    }})

    # --- INICIALIZAÇÃO DO SINGLETON DE APROVISIONAMENTO ---
    # O objeto já existe (criado em services/__init__.py), aqui apenas injetamos a config do app.
    from multicloud.services import provisioning_service
    provisioning_service.init_app(app)


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    if not app.testing:
        logging.basicConfig(level=level)
    app.logger.setLevel(level)


def register_blueprints(app):
    """Registra os módulos de rotas (Blueprints)."""
    prefix = app.config.get('API_PREFIX', '/api')

    # Removemos imports cíclicos ao importar dentro da função
    from multicloud.api.provisioning.routes import bp as provisioning_bp
    app.register_blueprint(provisioning_bp, url_prefix=prefix)

    from multicloud.api.prototypes.routes import bp as prototypes_bp
    app.register_blueprint(prototypes_bp, url_prefix=f"{prefix}/prototypes")


def register_error_handlers(app):
    """Centraliza o tratamento de exceções da aplicação."""

    @app.errorhandler(ResourceNotFound)
    @app.errorhandler(PrototypeNotFound)
    def handle_not_found_error(e):
        app.logger.info(f"Recurso não encontrado: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 404

    @app.errorhandler(ProvisioningError)
    def handle_provisioning_error(e):
        app.logger.warning(f"Provisioning Error: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 400

    @app.errorhandler(400)
    def handle_bad_request(e):
        return jsonify({'success': False, 'error': e.description}), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'error': 'Endpoint not found'}), 404

    @app.errorhandler(500)
    def handle_generic_error(e):
        app.logger.error(f"Internal Server Error: {str(e)}")
        return jsonify({'success': False, 'error': str(e)}), 500
