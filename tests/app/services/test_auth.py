"""Tests for app.services.auth."""
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from flask import session

from app.errors import AuthenticationRequired, SessionExpired
from app.services.auth import AuthSession, current_auth, require_auth, sign_in, sign_out


class TestAuthSession:

    def test_expired(self):
        past = datetime.now(timezone.utc) - timedelta(seconds=1)
        assert AuthSession('a@example.com', past).expired is True

    def test_active(self):
        future = datetime.now(timezone.utc) + timedelta(minutes=5)
        assert AuthSession('a@example.com', future).expired is False


class TestRequireAuth:

    def test_no_request_context(self):
        assert current_auth() is None
        with pytest.raises(AuthenticationRequired):
            require_auth()

    def test_malformed_payload(self, app):
        with app.test_request_context('/'):
            session['auth'] = {'email': 'a@example.com', 'expires_at': 'soon'}
            with pytest.raises(AuthenticationRequired):
                require_auth()

    def test_expired(self, app, make_auth_payload):
        with app.test_request_context('/'):
            session['auth'] = make_auth_payload('a@example.com', minutes=-5)
            with pytest.raises(SessionExpired):
                require_auth()

    def test_active(self, auth_context):
        assert require_auth().email == 'jean.dupont@example.com'


class TestSignIn:

    def test_open_access_without_password(self, app, sales_rep):
        with app.test_request_context('/'), patch('app.services.auth.APP_PASSWORD', None):
            auth = sign_in('JEAN.DUPONT@example.com', '')
            assert auth.email == 'jean.dupont@example.com'
            assert session['auth']['email'] == 'jean.dupont@example.com'

    def test_wrong_password(self, app, sales_rep):
        with app.test_request_context('/'), patch('app.services.auth.APP_PASSWORD', 'secret'):
            with pytest.raises(AuthenticationRequired, match='Invalid login credentials'):
                sign_in('jean.dupont@example.com', 'nope')

    def test_unknown_email(self, app, sales_rep):
        with app.test_request_context('/'), patch('app.services.auth.APP_PASSWORD', 'secret'):
            with pytest.raises(AuthenticationRequired):
                sign_in('stranger@example.com', 'secret')

    def test_sign_out(self, auth_context):
        sign_out()
        assert current_auth() is None
