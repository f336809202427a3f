from flask import Flask, flash, redirect, render_template, request, url_for
from flask_sqlalchemy import SQLAlchemy
from sports_scheduler.config import config, DEFAULT_SECRET_KEY
from sports_scheduler.errors import CSRFError

db = SQLAlchemy()

_SAFE_METHODS = {'GET', 'HEAD', 'OPTIONS'}


def _configure_logging(app):
    level = str(app.config.get('LOG_LEVEL') or 'INFO').strip().upper()
    app.logger.setLevel(level)


def _safe_referrer():
    """Return the referrer only when it points back at this host."""
    referrer = str(request.referrer or '')
    if referrer.startswith(request.host_url):
        return referrer
    return url_for('index')


def create_app(config_name='development'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    _configure_logging(app)

    if str(config_name).strip().lower() == 'production':
        secret_key = str(app.config.get('SECRET_KEY') or '').strip()
        if not secret_key or secret_key == DEFAULT_SECRET_KEY:
            raise RuntimeError('SECRET_KEY must be set to a non-default value in production')

    db.init_app(app)

    from sports_scheduler.auth_utils import (
        csrf_token_matches, current_identity, get_csrf_token, load_identity, login_required,
    )

    @app.before_request
    def _load_identity():
        load_identity()

    @app.before_request
    def _enforce_csrf_for_mutating_requests():
        if not app.config.get('CSRF_ENABLED', True):
            return None
        if request.method in _SAFE_METHODS:
            return None
        candidate = request.form.get('csrf_token') or request.headers.get('X-CSRF-Token')
        if not csrf_token_matches(candidate):
            raise CSRFError()
        return None

    @app.context_processor
    def _template_globals():
        return {
            'current_user': current_identity(),
            'csrf_token': get_csrf_token,
        }

    @app.errorhandler(CSRFError)
    def _csrf_error(error):
        app.logger.warning('Rejected %s %s: anti-forgery token mismatch', request.method, request.path)
        flash(error.message, 'error')
        return redirect(_safe_referrer())

    @app.errorhandler(404)
    def _not_found(error):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def _internal_error(error):
        # Flask has already logged the traceback through app.logger.
        db.session.rollback()
        return render_template('500.html'), 500

    from sports_scheduler.routes.auth import auth_bp
    from sports_scheduler.routes.admin import admin_bp
    from sports_scheduler.routes.sessions import sessions_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(sessions_bp, url_prefix='/sessions')

    @app.route('/')
    def index():
        if current_identity():
            return redirect(url_for('dashboard'))
        return render_template('index.html')

    @app.route('/dashboard')
    @login_required
    def dashboard():
        return render_template('dashboard.html')

    with app.app_context():
        from sports_scheduler import models  # noqa: F401
        db.create_all()

    return app
