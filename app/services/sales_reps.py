"""
Sales rep lookups — the foreign-key target of every assigned record.
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy import func

from app.errors import PermissionDenied, ValidationError
from app.models.sales_rep import SalesRep
from app.services.auth import require_auth
from app.services.records import storage_session

logger = logging.getLogger('services.sales_reps')


def to_app(rep: SalesRep) -> Dict:
    return {
        'id': rep.id,
        'code': rep.code,
        'name': rep.name,
        'email': rep.email,
        'isAdmin': bool(rep.is_admin),
    }


def fetch_sales_reps() -> List[Dict]:
    """All sales reps ordered by code. A permission error yields an empty list."""
    require_auth()
    try:
        with storage_session('fetching sales reps') as session:
            reps = session.query(SalesRep).order_by(SalesRep.code).all()
    except PermissionDenied:
        logger.warning("Permission denied reading sales_reps; returning empty list")
        return []
    return [to_app(r) for r in reps]


def get_sales_rep(sales_rep_id: str) -> Optional[Dict]:
    with storage_session('loading sales rep') as session:
        rep = session.get(SalesRep, sales_rep_id) if sales_rep_id else None
        return to_app(rep) if rep else None


def get_sales_rep_code(sales_rep_id: str) -> Optional[str]:
    rep = get_sales_rep(sales_rep_id)
    return rep['code'] if rep else None


def get_sales_rep_by_email(email: str) -> Optional[Dict]:
    """Case-insensitive lookup by email."""
    if not email:
        return None
    with storage_session('loading sales rep by email') as session:
        rep = (
            session.query(SalesRep)
            .filter(func.lower(SalesRep.email) == email.strip().lower())
            .first()
        )
        return to_app(rep) if rep else None


def is_admin(email: str) -> bool:
    rep = get_sales_rep_by_email(email)
    return bool(rep and rep['isAdmin'])


def create_sales_rep(code: str, name: str, email: str, is_admin: bool = False) -> Dict:
    code = (code or '').strip().upper()
    name = (name or '').strip()
    email = (email or '').strip().lower()
    for field, value in (('code', code), ('name', name), ('email', email)):
        if not value:
            raise ValidationError(f"{field} is required", field=field)

    with storage_session('creating sales rep') as session:
        rep = SalesRep(code=code, name=name, email=email, is_admin=bool(is_admin))
        session.add(rep)
        session.commit()
        logger.info("Created sales rep %s (%s)", code, email)
        return to_app(rep)
