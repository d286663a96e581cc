"""
Shared plumbing for the record services — sessions, field mapping, typed errors.

Each entity module declares how application field names (camelCase, as sent by
the front end) map to storage columns, which of them are editable, and how to
coerce values. Everything that touches the database goes through
storage_session() so storage failures surface as typed ServiceErrors.
"""
import logging
from contextlib import contextmanager
from typing import Callable, Dict, Iterable, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from app.database import get_session
from app.errors import (
    ServiceError, RecordNotFound, SalesRepNotFound, ValidationError,
    translate_storage_error,
)
from app.models.sales_rep import SalesRep
from app.services.dates import to_storage_date

logger = logging.getLogger('services.records')


@contextmanager
def storage_session(action: str):
    """
    Yield a DB session; roll back and translate storage errors on failure.

    ServiceErrors raised inside the block pass through untouched.
    """
    session = get_session()
    try:
        yield session
    except ServiceError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Storage error while %s", action, exc_info=True)
        raise translate_storage_error(e) from e
    finally:
        session.close()


# ── Value coercion ───────────────────────────────────────────────────────────

def as_text(value, field):
    if value is None:
        return None
    return str(value).strip()


def as_optional_int(value, field):
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", field=field)


def as_optional_date(value, field):
    if value is None or value == '':
        return None
    converted = to_storage_date(value)
    if converted is None:
        raise ValidationError(f"{field} is not a valid date (expected DD/MM/YYYY)", field=field)
    return converted


def as_bool(value, field):
    if isinstance(value, bool):
        return value
    raise ValidationError(f"{field} must be true or false", field=field)


def one_of(allowed: Iterable[str]) -> Callable:
    allowed = list(allowed)

    def _check(value, field):
        if value not in allowed:
            raise ValidationError(f"{field} must be one of: {', '.join(allowed)}", field=field)
        return value
    return _check


def to_columns(data: Dict, field_map: Dict[str, str], allowed: Iterable[str],
               converters: Dict[str, Callable]) -> Dict:
    """
    Translate an application-shaped dict into column values.

    Only keys in `allowed` are accepted; anything else raises ValidationError
    before the database is touched.
    """
    allowed = set(allowed)
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValidationError(
            f"Unknown or read-only field(s): {', '.join(unknown)}", field=unknown[0],
        )

    values = {}
    for key, value in data.items():
        column = field_map[key]
        convert = converters.get(column)
        values[column] = convert(value, key) if convert else value
    return values


# ── Common operations ────────────────────────────────────────────────────────

def ensure_sales_rep(session, sales_rep_id: Optional[str]) -> SalesRep:
    """Lookup-before-insert: the assignee must be an existing sales rep."""
    rep = session.get(SalesRep, sales_rep_id) if sales_rep_id else None
    if rep is None:
        logger.error("Sales rep not found: %s", sales_rep_id)
        raise SalesRepNotFound()
    return rep


def fetch_ordered(model, action: str) -> list:
    """All rows of a record table, newest first."""
    with storage_session(action) as session:
        return session.query(model).order_by(model.created_at.desc()).all()


def update_columns(model, record_id: str, values: Dict, action: str) -> None:
    """
    UPDATE exactly the given columns of one row — last write wins.

    Raises RecordNotFound when no row matches.
    """
    if not values:
        raise ValidationError("No fields to update")
    with storage_session(action) as session:
        if 'assigned_to' in values:
            ensure_sales_rep(session, values['assigned_to'])
        result = session.execute(
            update(model).where(model.id == record_id).values(**values)
        )
        if result.rowcount == 0:
            raise RecordNotFound()
        session.commit()
    logger.info("Updated %s %s: %s", model.__tablename__, record_id, ', '.join(sorted(values)))


def delete_row(model, record_id: str, action: str) -> None:
    with storage_session(action) as session:
        deleted = session.query(model).filter(model.id == record_id).delete()
        if deleted == 0:
            raise RecordNotFound()
        session.commit()
    logger.info("Deleted %s %s", model.__tablename__, record_id)


def mark_read(model, record_id: str) -> bool:
    """
    Best-effort is_read=True. Idempotent; failures are logged, never raised.
    """
    try:
        update_columns(model, record_id, {'is_read': True}, f"marking {model.__tablename__} as read")
        return True
    except ServiceError as e:
        logger.warning("Could not mark %s %s as read: %s", model.__tablename__, record_id, e.message)
        return False
