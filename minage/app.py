# minage/app.py
"""Application factory for the minimum password age service"""
from flask import Flask, jsonify

from minage.config import config
from minage.extensions import db
from minage.logger import configure_logging, get_logger
from minage.policy import parse_duration

logger = get_logger(__name__)


def create_app(config_name='default'):
    """Create and configure Flask application"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    configure_logging(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)

    # Register blueprints
    from minage.controllers.auth_controller import auth_bp
    from minage.controllers.admin_controller import admin_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(admin_bp, url_prefix='/admin')

    register_error_handlers(app)

    # Create database tables and the default realm
    with app.app_context():
        db.create_all()
        bootstrap(app)

    logger.info("Application created with %s configuration", config_name)
    return app


def bootstrap(app):
    from minage.services.auth_services import AuthService
    from minage.services.realm_service import RealmService
    from minage.models.user import User

    # An invalid MIN_PASSWORD_AGE fails here rather than at the first password change
    parse_duration(app.config['MIN_PASSWORD_AGE'])

    realm = RealmService.get_or_create_realm(app.config['DEFAULT_REALM'])
    db.session.flush()

    username = app.config.get('ADMIN_USERNAME')
    password = app.config.get('ADMIN_PASSWORD')
    if username and password:
        if User.query.filter_by(realm_id=realm.id, username=username).first() is None:
            AuthService.register(realm, username, password, is_admin=True)
            logger.info("Created administrator %s", username)

    db.session.commit()


def register_error_handlers(app):
    """Register error handlers"""
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'error': 'Internal server error'}), 500
