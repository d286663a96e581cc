"""
Date helpers — DD/MM/YYYY display form <-> UTC timestamps.

Records store timestamps; the API accepts and shows the French day/month/year
form. Conversion happens only here.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Optional, Union

from app.config import NOT_SPECIFIED

logger = logging.getLogger('services.dates')

DISPLAY_DATE_RE = re.compile(r'^(\d{2})/(\d{2})/(\d{4})$')


def _parse_iso(text: str) -> Optional[datetime]:
    try:
        dt = datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_storage_date(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Convert a display date ("21/12/2024") or ISO string to a UTC timestamp.

    Display dates become midnight UTC of that calendar day. Returns None for
    empty or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    text = str(value).strip()
    if not text:
        return None

    match = DISPLAY_DATE_RE.match(text)
    if match:
        day, month, year = (int(g) for g in match.groups())
        try:
            return datetime(year, month, day, tzinfo=timezone.utc)
        except ValueError:
            logger.error("Invalid date: %s", text)
            return None

    dt = _parse_iso(text)
    if dt is None:
        logger.error("Invalid date: %s", text)
    return dt


def to_display_date(value: Union[str, datetime, None]) -> str:
    """Render a timestamp (or ISO / display string) as DD/MM/YYYY."""
    if value is None or value == '':
        return NOT_SPECIFIED

    if isinstance(value, str):
        text = value.strip()
        if DISPLAY_DATE_RE.match(text):
            return text
        value = _parse_iso(text)
        if value is None:
            return NOT_SPECIFIED

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime('%d/%m/%Y')


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 string for JSON payloads (naive SQLite values are UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def is_valid_date(text: str) -> bool:
    if not text:
        return False
    match = DISPLAY_DATE_RE.match(text.strip())
    if match:
        day, month, year = (int(g) for g in match.groups())
        try:
            datetime(year, month, day)
            return True
        except ValueError:
            return False
    return _parse_iso(text.strip()) is not None


def days_between(first: datetime, second: datetime = None) -> int:
    """Absolute number of days between two timestamps (second defaults to now)."""
    second = second or datetime.now(timezone.utc)
    if first.tzinfo is None:
        first = first.replace(tzinfo=timezone.utc)
    if second.tzinfo is None:
        second = second.replace(tzinfo=timezone.utc)
    return round(abs((second - first).total_seconds()) / 86400)
