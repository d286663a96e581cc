"""
Candidate routes — prospects and client-need profiles.

Create accepts JSON or multipart/form-data with an optional CV in "file".
"""
import logging
from flask import Blueprint, jsonify

from app.routes.helpers import json_body, record_body, read_flag
from app.services import client_needs, prospects

logger = logging.getLogger('routes.candidates')

bp = Blueprint('candidates', __name__)


# ── Prospects ────────────────────────────────────────────────────────────────

@bp.route('/api/prospects', methods=['GET'])
def list_prospects():
    return jsonify(prospects.fetch_prospects())


@bp.route('/api/prospects', methods=['POST'])
def create_prospect():
    data, upload = record_body()
    return jsonify(prospects.create_prospect(data, upload=upload)), 201


@bp.route('/api/prospects/<prospect_id>', methods=['PATCH'])
def update_prospect(prospect_id):
    changes = json_body()
    prospects.update_prospect(prospect_id, changes)
    return jsonify({'id': prospect_id, 'updated': sorted(changes)})


@bp.route('/api/prospects/<prospect_id>', methods=['DELETE'])
def delete_prospect(prospect_id):
    prospects.delete_prospect(prospect_id)
    return '', 204


@bp.route('/api/prospects/<prospect_id>/read', methods=['POST'])
def mark_prospect_read(prospect_id):
    return jsonify({'id': prospect_id, 'marked': prospects.mark_prospect_as_read(prospect_id)})


@bp.route('/api/prospects/<prospect_id>/read', methods=['PUT'])
def toggle_prospect_read(prospect_id):
    is_read = read_flag()
    prospects.toggle_prospect_read_status(prospect_id, is_read)
    return jsonify({'id': prospect_id, 'isRead': is_read})


# ── Client-need profiles ─────────────────────────────────────────────────────

@bp.route('/api/client-needs', methods=['GET'])
def list_client_needs():
    return jsonify(client_needs.fetch_client_needs())


@bp.route('/api/client-needs', methods=['POST'])
def create_client_need():
    data, upload = record_body()
    return jsonify(client_needs.create_client_need(data, upload=upload)), 201


@bp.route('/api/client-needs/<profile_id>', methods=['PATCH'])
def update_client_need(profile_id):
    changes = json_body()
    client_needs.update_client_need(profile_id, changes)
    return jsonify({'id': profile_id, 'updated': sorted(changes)})


@bp.route('/api/client-needs/<profile_id>', methods=['DELETE'])
def delete_client_need(profile_id):
    client_needs.delete_client_need(profile_id)
    return '', 204


@bp.route('/api/client-needs/<profile_id>/read', methods=['POST'])
def mark_client_need_read(profile_id):
    return jsonify({'id': profile_id, 'marked': client_needs.mark_client_need_as_read(profile_id)})


@bp.route('/api/client-needs/<profile_id>/read', methods=['PUT'])
def toggle_client_need_read(profile_id):
    is_read = read_flag()
    client_needs.toggle_client_need_read_status(profile_id, is_read)
    return jsonify({'id': profile_id, 'isRead': is_read})
