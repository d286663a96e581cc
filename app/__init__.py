"""
Flask application factory.

Creates and configures the Flask app, registers all blueprints and the
daily-summary CLI command.
"""
import os
from datetime import timedelta

import click
from flask import Flask, request, jsonify


def create_app():
    """Create and configure the Flask application."""
    from app.config import SECRET_KEY, SESSION_TTL_MINUTES
    from app.errors import ServiceError, ValidationError
    from app.logging_config import configure_logging

    app = Flask(
        __name__,
        template_folder=os.path.join(os.path.dirname(os.path.dirname(__file__)), 'templates'),
    )

    configure_logging(app)

    # Secret key for sessions
    app.secret_key = SECRET_KEY
    app.permanent_session_lifetime = timedelta(minutes=SESSION_TTL_MINUTES)

    # ── Session auth ────────────────────────────────────────────────────
    from app.services.auth import require_auth, sign_in, sign_out

    OPEN_PATHS = {'/health', '/login', '/logout'}

    @app.before_request
    def require_login():
        if request.path in OPEN_PATHS or request.path.startswith('/functions/'):
            return
        if request.path.startswith('/api/'):
            require_auth()

    @app.route('/login', methods=['POST'])
    def login():
        from flask import session
        body = request.get_json(silent=True) or {}
        if not body.get('email'):
            raise ValidationError('email is required', field='email')
        auth = sign_in(body.get('email'), body.get('password') or '')
        session.permanent = True
        return jsonify({'email': auth.email, 'expiresAt': auth.expires_at.isoformat()})

    @app.route('/logout', methods=['POST'])
    def logout():
        sign_out()
        return '', 204

    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        return jsonify(e.to_dict()), e.status_code

    # Register blueprints
    from app.routes.dashboard import bp as dashboard_bp
    from app.routes.rfps import bp as rfps_bp
    from app.routes.candidates import bp as candidates_bp
    from app.routes.needs import bp as needs_bp
    from app.routes.settings import bp as settings_bp
    from app.routes.functions import bp as functions_bp

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(rfps_bp)
    app.register_blueprint(candidates_bp)
    app.register_blueprint(needs_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(functions_bp)

    # ── CLI: daily summaries (run from cron / the platform scheduler) ────
    @app.cli.command('send-daily-summaries')
    @click.option('--kind', type=click.Choice(['rfp', 'prospect', 'client_need']),
                  multiple=True, help='Summary kind(s) to send; defaults to all.')
    def send_daily_summaries(kind):
        """Email each sales rep the records still waiting in "À traiter"."""
        from app.services.daily_summary import run_daily_summary
        for k in kind or ('rfp', 'prospect', 'client_need'):
            result = run_daily_summary(k)
            click.echo(f"{k}: {result['message']} ({result['emailsSent']} email(s) sent)")

    # Import models so Base.metadata knows about them (required for SQLAlchemy).
    # Schema is managed by Alembic — no init_db() call.
    import importlib
    for module in ('sales_rep', 'rfp', 'prospect', 'client_need', 'need',
                   'linkedin_link', 'reference'):
        importlib.import_module(f'app.models.{module}')

    return app
