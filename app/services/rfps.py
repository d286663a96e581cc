"""
RFP ("AO") records — fetch, create, field updates, delete, read flag.

Application shape uses camelCase keys and DD/MM/YYYY dates; missing text
fields come back as empty strings.
"""
import logging
from typing import Dict, List

from app.config import RFP_STATUSES, STATUS_TO_PROCESS
from app.database import utcnow
from app.errors import ValidationError
from app.models.rfp import RFP
from app.services.auth import require_auth
from app.services.dates import to_display_date
from app.services.records import (
    storage_session, ensure_sales_rep, fetch_ordered, update_columns, delete_row, mark_read,
    to_columns, as_text, as_optional_int, as_optional_date, as_bool, one_of,
)

logger = logging.getLogger('services.rfps')

FIELDS = {
    'client': 'client',
    'mission': 'mission',
    'location': 'location',
    'maxRate': 'max_rate',
    'createdAt': 'created_at',
    'startDate': 'start_date',
    'status': 'status',
    'assignedTo': 'assigned_to',
    'rawContent': 'raw_content',
    'comments': 'comments',
    'isRead': 'is_read',
}

EDITABLE = {
    'client', 'mission', 'location', 'maxRate', 'createdAt', 'startDate',
    'status', 'assignedTo', 'rawContent', 'comments',
}

CONVERTERS = {
    'client': as_text,
    'mission': as_text,
    'location': as_text,
    'max_rate': as_optional_int,
    'created_at': as_optional_date,
    'start_date': as_optional_date,
    'status': one_of(RFP_STATUSES),
    'is_read': as_bool,
}


def to_app(rfp: RFP) -> Dict:
    return {
        'id': rfp.id,
        'client': rfp.client or '',
        'mission': rfp.mission or '',
        'location': rfp.location or '',
        'maxRate': rfp.max_rate,
        'createdAt': to_display_date(rfp.created_at),
        'startDate': to_display_date(rfp.start_date),
        'status': rfp.status,
        'assignedTo': rfp.assigned_to,
        'rawContent': rfp.raw_content or '',
        'isRead': bool(rfp.is_read),
        'comments': rfp.comments or '',
    }


def fetch_rfps() -> List[Dict]:
    require_auth()
    rfps = fetch_ordered(RFP, 'fetching rfps')
    logger.info("Fetched %d rfps", len(rfps))
    return [to_app(r) for r in rfps]


def create_rfp(data: Dict) -> Dict:
    """
    Insert an RFP assigned to an existing sales rep.

    Status defaults to "À traiter"; createdAt defaults to now and startDate to
    the creation time when not supplied.
    """
    if not data.get('assignedTo'):
        raise ValidationError("assignedTo is required", field='assignedTo')

    values = to_columns(data, FIELDS, EDITABLE, CONVERTERS)
    values.setdefault('status', STATUS_TO_PROCESS)
    if not values.get('created_at'):
        values['created_at'] = utcnow()
    if not values.get('start_date'):
        values['start_date'] = values['created_at']
    values['is_read'] = False

    with storage_session('creating rfp') as session:
        ensure_sales_rep(session, values['assigned_to'])
        rfp = RFP(**values)
        session.add(rfp)
        session.commit()
        logger.info("Created rfp %s for %s", rfp.id, rfp.client,
                    extra={'kind': 'rfp', 'record_id': rfp.id})
        return to_app(rfp)


def update_rfp(rfp_id: str, changes: Dict) -> None:
    """Update exactly the named fields (closed key set)."""
    values = to_columns(changes, FIELDS, EDITABLE, CONVERTERS)
    update_columns(RFP, rfp_id, values, 'updating rfp')


def delete_rfp(rfp_id: str) -> None:
    delete_row(RFP, rfp_id, 'deleting rfp')


def mark_rfp_as_read(rfp_id: str) -> bool:
    return mark_read(RFP, rfp_id)


def toggle_rfp_read_status(rfp_id: str, is_read: bool) -> None:
    values = to_columns({'isRead': is_read}, FIELDS, {'isRead'}, CONVERTERS)
    update_columns(RFP, rfp_id, values, 'toggling rfp read status')
