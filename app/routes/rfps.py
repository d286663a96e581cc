"""
RFP routes — CRUD, read flag, LinkedIn sourcing links.
"""
import logging
from flask import Blueprint, jsonify

from app.routes.helpers import json_body, read_flag
from app.services import linkedin, rfps

logger = logging.getLogger('routes.rfps')

bp = Blueprint('rfps', __name__)


@bp.route('/api/rfps', methods=['GET'])
def list_rfps():
    return jsonify(rfps.fetch_rfps())


@bp.route('/api/rfps', methods=['POST'])
def create_rfp():
    return jsonify(rfps.create_rfp(json_body())), 201


@bp.route('/api/rfps/<rfp_id>', methods=['PATCH'])
def update_rfp(rfp_id):
    changes = json_body()
    rfps.update_rfp(rfp_id, changes)
    return jsonify({'id': rfp_id, 'updated': sorted(changes)})


@bp.route('/api/rfps/<rfp_id>', methods=['DELETE'])
def delete_rfp(rfp_id):
    rfps.delete_rfp(rfp_id)
    return '', 204


@bp.route('/api/rfps/<rfp_id>/read', methods=['POST'])
def mark_read(rfp_id):
    return jsonify({'id': rfp_id, 'marked': rfps.mark_rfp_as_read(rfp_id)})


@bp.route('/api/rfps/<rfp_id>/read', methods=['PUT'])
def toggle_read(rfp_id):
    is_read = read_flag()
    rfps.toggle_rfp_read_status(rfp_id, is_read)
    return jsonify({'id': rfp_id, 'isRead': is_read})


# ── LinkedIn links ───────────────────────────────────────────────────────────

@bp.route('/api/rfps/<rfp_id>/linkedin-links', methods=['GET'])
def list_links(rfp_id):
    return jsonify(linkedin.fetch_linkedin_links(rfp_id))


@bp.route('/api/rfps/<rfp_id>/linkedin-links', methods=['POST'])
def add_links(rfp_id):
    body = json_body()
    urls = body.get('urls') or ([body['url']] if body.get('url') else [])
    return jsonify(linkedin.add_linkedin_links(rfp_id, urls)), 201


@bp.route('/api/linkedin-links/<link_id>', methods=['DELETE'])
def delete_link(link_id):
    linkedin.delete_linkedin_link(link_id)
    return '', 204


@bp.route('/api/linkedin-links/counts')
def link_counts():
    return jsonify(linkedin.get_linkedin_link_counts())
