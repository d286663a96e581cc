"""
Function endpoints — POST /functions/<name> with a JSON body.

Invoked by the notification worker and the daily-summary scheduler. Replies are
always {success, message, ...}; a bearer secret guards the endpoints when
FUNCTIONS_SECRET is set.
"""
import hmac
import logging
from flask import Blueprint, jsonify, request

from app.config import FUNCTIONS_SECRET
from app.errors import ServiceError
from app.services.daily_summary import run_daily_summary
from app.services.notifications import send_record_notification

logger = logging.getLogger('routes.functions')

bp = Blueprint('functions', __name__, url_prefix='/functions')

FUNCTIONS = {
    'send-rfp-notification': lambda body: send_record_notification('rfp', body),
    'send-prospect-notification': lambda body: send_record_notification('prospect', body),
    'send-client-need-notification': lambda body: send_record_notification('client_need', body),
    'send-reference-notification': lambda body: send_record_notification('reference', body),
    'send-daily-rfp-summary': lambda body: run_daily_summary('rfp'),
    'send-daily-prospects-summary': lambda body: run_daily_summary('prospect'),
    'send-daily-client-needs-summary': lambda body: run_daily_summary('client_need'),
}


@bp.before_request
def check_secret():
    if not FUNCTIONS_SECRET:
        return  # No secret set — open access (local dev)
    header = request.headers.get('Authorization', '')
    if not hmac.compare_digest(header, f'Bearer {FUNCTIONS_SECRET}'):
        return jsonify({'success': False, 'message': 'Unauthorized'}), 401


@bp.errorhandler(ServiceError)
def handle_service_error(e):
    return jsonify({'success': False, 'message': e.message}), e.status_code


@bp.route('/<name>', methods=['POST'])
def invoke(name):
    handler = FUNCTIONS.get(name)
    if handler is None:
        return jsonify({'success': False, 'message': f'Unknown function: {name}'}), 404

    body = request.get_json(silent=True) or {}
    logger.info("Invoking function %s", name)
    try:
        result = handler(body)
    except ServiceError:
        raise
    except Exception as e:
        logger.error("Function %s failed", name, exc_info=True)
        return jsonify({'success': False, 'message': str(e)}), 500

    return jsonify(result), 200 if result.get('success') else 500
