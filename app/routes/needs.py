"""
Needs + reference marketplace routes.
"""
import logging
from flask import Blueprint, jsonify, request

from app.routes.helpers import json_body
from app.services import needs, references

logger = logging.getLogger('routes.needs')

bp = Blueprint('needs', __name__)


@bp.route('/api/needs', methods=['GET'])
def list_needs():
    """All needs, or only open ones with ?open=1."""
    if request.args.get('open') in ('1', 'true'):
        return jsonify(needs.fetch_open_needs())
    return jsonify(needs.fetch_needs())


@bp.route('/api/needs', methods=['POST'])
def create_need():
    return jsonify(needs.create_need(json_body())), 201


@bp.route('/api/needs/<need_id>', methods=['PATCH'])
def update_need(need_id):
    changes = json_body()
    needs.update_need(need_id, changes)
    return jsonify({'id': need_id, 'updated': sorted(changes)})


@bp.route('/api/needs/<need_id>', methods=['DELETE'])
def delete_need(need_id):
    needs.delete_need(need_id)
    return '', 204


# ── Reference marketplace ────────────────────────────────────────────────────

@bp.route('/api/references', methods=['GET'])
def list_references():
    return jsonify(references.fetch_references())


@bp.route('/api/references', methods=['POST'])
def add_reference():
    return jsonify(references.add_reference(json_body())), 201


@bp.route('/api/references/<reference_id>', methods=['PATCH'])
def update_reference(reference_id):
    changes = json_body()
    references.update_reference(reference_id, changes)
    return jsonify({'id': reference_id, 'updated': sorted(changes)})


@bp.route('/api/references/<reference_id>', methods=['DELETE'])
def delete_reference(reference_id):
    references.delete_reference(reference_id)
    return '', 204
