from flask import Flask, request
from werkzeug.exceptions import HTTPException
from toolnav.config import Config
from toolnav.extensions import db, login_manager
from toolnav.models import AdminUser
from toolnav.utils.helpers import json_error

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize Extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Register Blueprints
    from toolnav.routes.auth import auth_bp
    from toolnav.routes.categories import categories_bp
    from toolnav.routes.tools import tools_bp
    from toolnav.routes.api import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(tools_bp)
    app.register_blueprint(api_bp)

    from toolnav.seed import register_commands
    register_commands(app)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if request.path.startswith('/api/'):
            return json_error(error.description if error.code == 400 else error.name, error.code)
        return error

    # Initialize DB
    with app.app_context():
        db.create_all()

    return app

@login_manager.user_loader
def load_user(user_id):
    return db.session.get(AdminUser, int(user_id))

@login_manager.unauthorized_handler
def unauthorized():
    return json_error('Unauthorized', 401)
