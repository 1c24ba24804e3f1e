from flask import jsonify
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()


@login_manager.unauthorized_handler
def _unauthorized():
    # API clients get JSON instead of a redirect to a login page
    return jsonify({"message": "Authentication required"}), 401
