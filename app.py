from flask import Flask, jsonify
from config import get_config
from extensions import db, migrate, bcrypt, mail
from services.errors import ApiError
import logging
from logging.handlers import RotatingFileHandler
import os
import sys

def create_app(config_name=None):
    app = Flask(__name__)

    # Get configuration based on environment or passed parameter
    if config_name:
        from config import config
        app.config.from_object(config[config_name])
    else:
        app.config.from_object(get_config())

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    mail.init_app(app)

    # Import models to register them with SQLAlchemy
    from models import (  # noqa: F401
        User, AuthSession, CopingTool, CopingToolCompletion,
        CravingSession, JournalEntry, CalendarEvent,
    )

    _configure_logging(app)

    # Register blueprints
    from routes.auth import auth_bp
    from routes.coping_tools import coping_tools_bp
    from routes.journal import journal_bp
    from routes.calendar_events import calendar_events_bp
    from routes.craving_sessions import craving_sessions_bp
    from routes.user import user_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(coping_tools_bp, url_prefix='/api/coping-tools')
    app.register_blueprint(journal_bp, url_prefix='/api/journal')
    app.register_blueprint(calendar_events_bp, url_prefix='/api/calendar-events')
    app.register_blueprint(craving_sessions_bp, url_prefix='/api/craving-sessions')
    app.register_blueprint(user_bp, url_prefix='/api/user')

    @app.route('/health')
    def health():
        return jsonify(status='ok')

    # Error handlers
    @app.errorhandler(ApiError)
    def api_error(error):
        if error.status_code >= 500:
            db.session.rollback()
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify(error='Not found'), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify(error='Method not allowed'), 405

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify(error='Internal server error'), 500

    return app


def _configure_logging(app):
    """Attach a rotating file handler (or stdout when LOG_TO_STDOUT is set)."""
    if app.debug or app.testing:
        return

    if app.config.get('LOG_TO_STDOUT'):
        handler = logging.StreamHandler(sys.stdout)
    else:
        if not os.path.exists('logs'):
            os.mkdir('logs')
        handler = RotatingFileHandler('logs/recovery_tracker.log', maxBytes=10240, backupCount=10)

    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
    handler.setLevel(level)
    app.logger.addHandler(handler)
    app.logger.setLevel(level)
    app.logger.info('Recovery Tracker startup')
