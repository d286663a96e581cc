"""
Needs — open client requirements that client-need profiles are matched to.
"""
import logging
from typing import Dict, List

from app.config import NEED_STATUSES, OPEN_NEED_STATUSES
from app.errors import ValidationError
from app.models.need import Need
from app.services.auth import require_auth
from app.services.dates import to_display_date, to_iso
from app.services.records import (
    storage_session, update_columns, delete_row, to_columns,
    as_text, as_optional_int, as_optional_date, one_of,
)

logger = logging.getLogger('services.needs')

FIELDS = {
    'title': 'title',
    'client': 'client',
    'description': 'description',
    'location': 'location',
    'skills': 'skills',
    'maxRate': 'max_rate',
    'startDate': 'start_date',
    'endDate': 'end_date',
    'status': 'status',
}

EDITABLE = set(FIELDS)

CONVERTERS = {
    'title': as_text,
    'client': as_text,
    'description': as_text,
    'location': as_text,
    'skills': as_text,
    'max_rate': as_optional_int,
    'start_date': as_optional_date,
    'end_date': as_optional_date,
    'status': one_of(NEED_STATUSES),
}


def to_app(need: Need) -> Dict:
    return {
        'id': need.id,
        'title': need.title,
        'client': need.client,
        'description': need.description or '',
        'location': need.location or '',
        'skills': need.skills or '',
        'maxRate': need.max_rate,
        'startDate': to_display_date(need.start_date) if need.start_date else None,
        'endDate': to_display_date(need.end_date) if need.end_date else None,
        'status': need.status,
        'createdBy': need.created_by,
        'createdAt': to_iso(need.created_at),
        'updatedAt': to_iso(need.updated_at),
    }


def _fetch(statuses=None) -> List[Dict]:
    require_auth()
    with storage_session('fetching needs') as session:
        query = session.query(Need)
        if statuses:
            query = query.filter(Need.status.in_(statuses))
        needs = query.order_by(Need.created_at.desc()).all()
    return [to_app(n) for n in needs]


def fetch_needs() -> List[Dict]:
    return _fetch()


def fetch_open_needs() -> List[Dict]:
    """Needs a profile can still be matched to ("Ouvert" or "En cours")."""
    return _fetch(OPEN_NEED_STATUSES)


def create_need(data: Dict) -> Dict:
    auth = require_auth()
    values = to_columns(data, FIELDS, EDITABLE, CONVERTERS)
    for field in ('title', 'client'):
        if not values.get(field):
            raise ValidationError(f"{field} is required", field=field)
    values.setdefault('status', 'Ouvert')

    with storage_session('creating need') as session:
        need = Need(created_by=auth.email, **values)
        session.add(need)
        session.commit()
        logger.info("Created need %s (%s)", need.id, need.title)
        return to_app(need)


def update_need(need_id: str, changes: Dict) -> None:
    values = to_columns(changes, FIELDS, EDITABLE, CONVERTERS)
    update_columns(Need, need_id, values, 'updating need')


def delete_need(need_id: str) -> None:
    delete_row(Need, need_id, 'deleting need')
