"""
Reference marketplace — reference contacts gathered for client needs.
"""
import logging
from typing import Dict, List

from app.config import REFERENCE_STATUSES, STATUS_TO_PROCESS
from app.errors import ValidationError
from app.models.reference import Reference
from app.services.auth import require_auth
from app.services.dates import to_iso
from app.services.records import (
    storage_session, ensure_sales_rep, fetch_ordered, update_columns, delete_row,
    to_columns, as_text, one_of,
)

logger = logging.getLogger('services.references')

FIELDS = {
    'client': 'client',
    'need': 'need',
    'techName': 'tech_name',
    'phone': 'phone',
    'email': 'email',
    'status': 'status',
    'assignedTo': 'assigned_to',
    'comments': 'comments',
}

EDITABLE = set(FIELDS)


def _empty_to_none(value, field):
    value = as_text(value, field)
    return value or None


CONVERTERS = {
    'client': as_text,
    'need': as_text,
    'tech_name': _empty_to_none,
    'phone': _empty_to_none,
    'email': _empty_to_none,
    'status': one_of(REFERENCE_STATUSES),
}


def to_app(ref: Reference) -> Dict:
    rep = ref.sales_rep
    return {
        'id': ref.id,
        'client': ref.client,
        'need': ref.need or '',
        'techName': ref.tech_name,
        'phone': ref.phone,
        'email': ref.email,
        'status': ref.status,
        'assignedTo': ref.assigned_to,
        'comments': ref.comments or '',
        'createdBy': ref.created_by,
        'createdAt': to_iso(ref.created_at),
        'salesRep': {
            'id': rep.id, 'name': rep.name, 'email': rep.email, 'code': rep.code,
        } if rep else None,
    }


def fetch_references() -> List[Dict]:
    require_auth()
    refs = fetch_ordered(Reference, 'fetching references')
    return [to_app(r) for r in refs]


def add_reference(data: Dict) -> Dict:
    auth = require_auth()
    values = to_columns(data, FIELDS, EDITABLE, CONVERTERS)
    if not values.get('client'):
        raise ValidationError("client is required", field='client')
    if not values.get('assigned_to'):
        raise ValidationError("assignedTo is required", field='assignedTo')
    values.setdefault('status', STATUS_TO_PROCESS)

    with storage_session('creating reference') as session:
        ensure_sales_rep(session, values['assigned_to'])
        ref = Reference(created_by=auth.email, **values)
        session.add(ref)
        session.commit()
        session.refresh(ref)
        logger.info("Created reference %s for %s", ref.id, ref.client)
        return to_app(ref)


def update_reference(reference_id: str, changes: Dict) -> None:
    values = to_columns(changes, FIELDS, EDITABLE, CONVERTERS)
    update_columns(Reference, reference_id, values, 'updating reference')


def delete_reference(reference_id: str) -> None:
    delete_row(Reference, reference_id, 'deleting reference')
