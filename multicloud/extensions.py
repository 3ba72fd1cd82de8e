from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS

# Inicialização das extensões
# Nota: A vinculação com o app (init_app) é feita no __init__.py
db = SQLAlchemy()
migrate = Migrate()
cors = CORS()
