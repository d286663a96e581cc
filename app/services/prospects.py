"""
Prospect records — candidate profiles for general business development.
"""
import logging
from typing import Dict, List, Optional

from app.models.prospect import Prospect
from app.services import candidates
from app.services.auth import require_auth
from app.services.records import (
    fetch_ordered, update_columns, mark_read, to_columns, as_text,
)

logger = logging.getLogger('services.prospects')

FIELDS = {**candidates.FIELDS, 'targetAccount': 'target_account'}
EDITABLE = candidates.EDITABLE | {'targetAccount'}
CONVERTERS = {**candidates.CONVERTERS, 'target_account': as_text}


def to_app(prospect: Prospect) -> Dict:
    return {
        **candidates.to_app(prospect),
        'targetAccount': prospect.target_account or '',
    }


def fetch_prospects() -> List[Dict]:
    require_auth()
    prospects = fetch_ordered(Prospect, 'fetching prospects')
    logger.info("Fetched %d prospects", len(prospects))
    return [to_app(p) for p in prospects]


def create_prospect(data: Dict, upload: Optional[Dict] = None) -> Dict:
    """
    Create a prospect; `upload` is {filename, data, content_type} for an attached CV.
    """
    return candidates.create_candidate(
        Prospect, 'prospect', data, FIELDS, EDITABLE, CONVERTERS,
        label_column='target_account', serialize=to_app, upload=upload,
    )


def update_prospect(prospect_id: str, changes: Dict) -> None:
    values = to_columns(changes, FIELDS, EDITABLE, CONVERTERS)
    update_columns(Prospect, prospect_id, values, 'updating prospect')


def delete_prospect(prospect_id: str) -> None:
    candidates.delete_candidate(Prospect, 'prospect', prospect_id)


def mark_prospect_as_read(prospect_id: str) -> bool:
    return mark_read(Prospect, prospect_id)


def toggle_prospect_read_status(prospect_id: str, is_read: bool) -> None:
    values = to_columns({'isRead': is_read}, FIELDS, {'isRead'}, CONVERTERS)
    update_columns(Prospect, prospect_id, values, 'toggling prospect read status')
