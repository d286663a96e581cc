"""
Client-need profiles — candidate profiles recorded against an open Need.

selectedNeedTitle is denormalized onto the row so emails and tables can show it
without a join; it is refreshed whenever selectedNeedId changes.
"""
import logging
from typing import Dict, List, Optional

from app.errors import ValidationError
from app.models.client_need import ClientNeed
from app.models.need import Need
from app.services import candidates
from app.services.auth import require_auth
from app.services.records import (
    storage_session, fetch_ordered, update_columns, mark_read, to_columns, as_text,
)

logger = logging.getLogger('services.client_needs')

FIELDS = {
    **candidates.FIELDS,
    'selectedNeedId': 'selected_need_id',
    'selectedNeedTitle': 'selected_need_title',
}
EDITABLE = candidates.EDITABLE | {'selectedNeedId', 'selectedNeedTitle'}
CONVERTERS = {**candidates.CONVERTERS, 'selected_need_title': as_text}


def to_app(profile: ClientNeed) -> Dict:
    return {
        **candidates.to_app(profile),
        'selectedNeedId': profile.selected_need_id,
        'selectedNeedTitle': profile.selected_need_title or '',
    }


def _with_need_title(values: Dict) -> Dict:
    """
    Fill selected_need_title from the Need when only the id was given.

    Clearing the id clears the title with it.
    """
    if 'selected_need_id' in values and not values['selected_need_id']:
        return {**values, 'selected_need_id': None, 'selected_need_title': ''}
    need_id = values.get('selected_need_id')
    if not need_id or values.get('selected_need_title'):
        return values
    with storage_session('loading selected need') as session:
        need = session.get(Need, need_id)
    if need is None:
        raise ValidationError("Selected need not found", field='selectedNeedId')
    return {**values, 'selected_need_title': need.title}


def fetch_client_needs() -> List[Dict]:
    require_auth()
    profiles = fetch_ordered(ClientNeed, 'fetching client needs')
    logger.info("Fetched %d client-need profiles", len(profiles))
    return [to_app(p) for p in profiles]


def create_client_need(data: Dict, upload: Optional[Dict] = None) -> Dict:
    data = dict(data)
    if data.get('selectedNeedId') and not data.get('selectedNeedTitle'):
        title = _with_need_title({'selected_need_id': data['selectedNeedId']})['selected_need_title']
        data['selectedNeedTitle'] = title
    return candidates.create_candidate(
        ClientNeed, 'client_need', data, FIELDS, EDITABLE, CONVERTERS,
        label_column='selected_need_title', serialize=to_app, upload=upload,
    )


def update_client_need(profile_id: str, changes: Dict) -> None:
    values = _with_need_title(to_columns(changes, FIELDS, EDITABLE, CONVERTERS))
    update_columns(ClientNeed, profile_id, values, 'updating client need')


def delete_client_need(profile_id: str) -> None:
    candidates.delete_candidate(ClientNeed, 'client_need', profile_id)


def mark_client_need_as_read(profile_id: str) -> bool:
    return mark_read(ClientNeed, profile_id)


def toggle_client_need_read_status(profile_id: str, is_read: bool) -> None:
    values = to_columns({'isRead': is_read}, FIELDS, {'isRead'}, CONVERTERS)
    update_columns(ClientNeed, profile_id, values, 'toggling client need read status')
