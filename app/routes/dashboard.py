"""
Dashboard routes — health check, session info.
"""
import logging
from flask import Blueprint, jsonify
from sqlalchemy import text

from app.database import get_session
from app.services.auth import require_auth
from app.services.sales_reps import get_sales_rep_by_email

logger = logging.getLogger('routes.dashboard')

bp = Blueprint('dashboard', __name__)


@bp.route('/health')
def health_check():
    """Health check endpoint — reports database reachability."""
    session = get_session()
    try:
        session.execute(text('SELECT 1'))
        database = 'ok'
    except Exception as e:
        logger.error("Health check database error: %s", e)
        database = 'unavailable'
    finally:
        session.close()

    status = 'healthy' if database == 'ok' else 'degraded'
    return jsonify({'status': status, 'database': database}), 200 if database == 'ok' else 503


@bp.route('/api/me')
def me():
    """The signed-in user and their sales rep profile."""
    auth = require_auth()
    return jsonify({
        'email': auth.email,
        'expiresAt': auth.expires_at.isoformat(),
        'salesRep': get_sales_rep_by_email(auth.email),
    })
