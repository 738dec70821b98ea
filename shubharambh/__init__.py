import os
import logging
from flask import Flask, jsonify, send_from_directory
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_restx import Api
from shubharambh.config import Config

migrate = Migrate()
db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()

logger = logging.getLogger(__name__)


def create_api():
    return Api(
        title='Shubharambh API',
        version='1.0',
        description='Event and wedding marketplace: vendors, listings, enquiries and appointments',
        doc='/docs',
        ui_config={
            'displayOperationId': True,
            'docExpansion': 'none',
            'filter': True,
            'defaultModelsExpandDepth': 1,
            'defaultModelExpandDepth': 1
        },
        security=[{'BearerAuth': []}],
        authorizations={
            'BearerAuth': {
                'type': 'apiKey',
                'in': 'header',
                'name': 'Authorization',
                'description': 'Enter your JWT token as "Bearer <token>"'
            }
        }
    )


def create_app(config_class=Config):
    app = Flask(__name__, static_url_path='/static')
    app.config.from_object(config_class)
    # Let JWT errors reach the handlers registered by JWTManager instead of restx
    app.config['PROPAGATE_EXCEPTIONS'] = True
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    # Create the upload directory if it doesn't exist
    upload_folder = os.path.abspath(app.config['UPLOAD_FOLDER'])
    app.config['UPLOAD_FOLDER'] = upload_folder
    if not os.path.exists(upload_folder):
        os.makedirs(upload_folder)

    # Route for serving uploaded listing images
    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

    # Enable CORS
    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "DELETE", "OPTIONS"]))

    from .utils.auth_middleware import setup_jwt_handlers
    setup_jwt_handlers(jwt)

    # Register API namespaces
    from .routes import register_namespaces
    api = create_api()
    register_namespaces(api)
    api.init_app(app)

    @app.errorhandler(403)
    def forbidden(error):
        return jsonify({
            'message': 'You do not have permission to perform this operation',
            'error': 'unauthorized'
        }), 403

    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    return app
