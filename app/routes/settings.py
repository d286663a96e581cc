"""
Settings routes — sales reps, per-user preferences, document extraction.
"""
import logging
from flask import Blueprint, jsonify

from app.errors import PermissionDenied, ValidationError
from app.routes.helpers import json_body
from app.services import extraction, sales_reps
from app.services.auth import require_auth
from app.services.preferences import Preferences

logger = logging.getLogger('routes.settings')

bp = Blueprint('settings', __name__)

EXTRACTORS = {
    'rfp': extraction.analyze_rfp,
    'candidate': extraction.analyze_candidate,
}


@bp.route('/api/sales-reps', methods=['GET'])
def list_sales_reps():
    return jsonify(sales_reps.fetch_sales_reps())


@bp.route('/api/sales-reps', methods=['POST'])
def create_sales_rep():
    """Admins only."""
    auth = require_auth()
    if not sales_reps.is_admin(auth.email):
        raise PermissionDenied()
    body = json_body()
    rep = sales_reps.create_sales_rep(
        body.get('code'), body.get('name'), body.get('email'), bool(body.get('isAdmin')),
    )
    return jsonify(rep), 201


@bp.route('/api/preferences', methods=['GET'])
def get_preferences():
    auth = require_auth()
    return jsonify(Preferences(auth.email).to_dict())


@bp.route('/api/preferences', methods=['PUT'])
def update_preferences():
    auth = require_auth()
    prefs = Preferences(auth.email)
    prefs.update(json_body())
    return jsonify(prefs.to_dict())


@bp.route('/api/preferences/visited', methods=['POST'])
def mark_visited():
    auth = require_auth()
    Preferences(auth.email).mark_visited(json_body().get('url'))
    return '', 204


@bp.route('/api/extract/<kind>', methods=['POST'])
def extract(kind):
    """Pre-fill form fields from pasted text via OpenAI."""
    if kind not in EXTRACTORS:
        raise ValidationError(f"Unknown extraction kind: {kind}")
    content = json_body().get('content') or ''
    return jsonify(EXTRACTORS[kind](content))
