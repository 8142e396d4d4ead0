import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy

from solosphere.config import config, get_config_name

db = SQLAlchemy()
jwt = JWTManager()
logger = logging.getLogger(__name__)


def _configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    app.logger.setLevel(level)


def _register_jwt_handlers():
    # Every verification failure is a 401; the view never runs
    @jwt.unauthorized_loader
    def missing_token(reason):
        logger.warning(f"Rejected request without token: {reason}")
        return jsonify({'message': 'unauthorized access'}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        logger.warning(f"Rejected request with invalid token: {reason}")
        return jsonify({'message': 'unauthorized access'}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        logger.warning(f"Rejected expired token for {jwt_payload.get('sub')}")
        return jsonify({'message': 'unauthorized access'}), 401


def _register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not Found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method Not Allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f"Internal server error: {error}")
        return jsonify({'error': 'Internal Server Error'}), 500


_register_jwt_handlers()


def create_app(config_name=None):
    """Application factory."""
    if config_name is None:
        config_name = get_config_name()

    app = Flask(__name__)
    app.config.from_object(config[config_name]())
    _configure_logging(app)

    db.init_app(app)
    jwt.init_app(app)
    CORS(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)

    from solosphere.auth import auth_bp
    from solosphere.bids import bids_bp
    from solosphere.jobs import jobs_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(bids_bp)
    _register_error_handlers(app)

    @app.route('/')
    def index():
        return 'Hello from SoloSphere Server....'

    # --- Initialize DB ---
    with app.app_context():
        db.create_all()

    app.logger.info(f"SoloSphere API created for {config_name} environment")
    return app
