"""
Session handling — sign in / sign out / session checks for the record services.

A session lives in the signed Flask cookie and carries the user's email plus an
expiry. Record services call require_auth() before reading data.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from flask import has_request_context, session

from app.config import APP_PASSWORD, SESSION_TTL_MINUTES
from app.errors import AuthenticationRequired, SessionExpired

logger = logging.getLogger('services.auth')

SESSION_KEY = 'auth'


@dataclass
class AuthSession:
    email: str
    expires_at: datetime

    @property
    def expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at

    def to_dict(self):
        return {'email': self.email, 'expires_at': self.expires_at.isoformat()}


def current_auth() -> Optional[AuthSession]:
    """The session attached to the current request, or None."""
    if not has_request_context():
        return None
    data = session.get(SESSION_KEY)
    if not data:
        return None
    try:
        return AuthSession(
            email=data['email'],
            expires_at=datetime.fromisoformat(data['expires_at']),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Discarding malformed session payload")
        return None


def require_auth() -> AuthSession:
    """Return the active session or raise AuthenticationRequired / SessionExpired."""
    auth = current_auth()
    if auth is None:
        logger.error("No active session found")
        raise AuthenticationRequired()
    if auth.expired:
        logger.info("Session for %s expired at %s", auth.email, auth.expires_at.isoformat())
        raise SessionExpired()
    return auth


def sign_in(email: str, password: str) -> AuthSession:
    """
    Email + password sign-in.

    The password is the shared APP_PASSWORD (no password set = open access for
    local dev); the email must belong to a sales rep.
    """
    from app.services.sales_reps import get_sales_rep_by_email

    if APP_PASSWORD and password != APP_PASSWORD:
        raise AuthenticationRequired('Invalid login credentials')

    rep = get_sales_rep_by_email(email or '')
    if rep is None:
        raise AuthenticationRequired('Invalid login credentials')

    auth = AuthSession(
        email=rep['email'],
        expires_at=datetime.now(timezone.utc) + timedelta(minutes=SESSION_TTL_MINUTES),
    )
    session[SESSION_KEY] = auth.to_dict()
    logger.info("Signed in %s", auth.email)
    return auth


def sign_out():
    session.pop(SESSION_KEY, None)
