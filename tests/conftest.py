"""Shared test fixtures."""
import importlib
from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import patch, MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base

MODEL_MODULES = ('sales_rep', 'rfp', 'prospect', 'client_need', 'need', 'linkedin_link', 'reference')


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created (one shared connection)."""
    engine = create_engine(
        'sqlite://', poolclass=StaticPool, connect_args={'check_same_thread': False},
    )
    for module in MODEL_MODULES:
        importlib.import_module(f'app.models.{module}')
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Session for arranging and inspecting rows. Commit fixtures explicitly."""
    Session = sessionmaker(bind=db_engine, expire_on_commit=False)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def patch_get_session(db_engine):
    """
    Route get_session() calls inside the record services to the test engine.

    app.services.records does `from app.database import get_session` at import
    time, so the local binding is what must be patched. Each call returns a new
    session so close() in production code behaves as it does in production.
    """
    TestSession = sessionmaker(bind=db_engine, expire_on_commit=False)
    with patch('app.services.records.get_session', side_effect=lambda: TestSession()), \
         patch('app.routes.dashboard.get_session', side_effect=lambda: TestSession()):
        yield TestSession


@pytest.fixture(autouse=True)
def mock_schedule():
    """Keep record creation from talking to Redis; returns the schedule mock."""
    with patch('app.services.candidates.schedule_notification', return_value=True) as m:
        yield m


@pytest.fixture
def mock_redis():
    """Dict-backed stand-in for the decoded Redis client (hashes + sets)."""
    hashes, sets = {}, {}
    mock = MagicMock()
    mock.hget.side_effect = lambda key, field: hashes.get(key, {}).get(field)
    mock.hset.side_effect = lambda key, field, value: hashes.setdefault(key, {}).__setitem__(field, value)
    mock.hdel.side_effect = lambda key, field: hashes.get(key, {}).pop(field, None)
    mock.hgetall.side_effect = lambda key: dict(hashes.get(key, {}))
    mock.sadd.side_effect = lambda key, value: sets.setdefault(key, set()).add(value)
    mock.smembers.side_effect = lambda key: set(sets.get(key, set()))
    mock.hashes = hashes
    mock.sets = sets
    with patch('app.extensions.redis_client', mock):
        yield mock


@pytest.fixture
def app():
    """Flask test app."""
    from app import create_app
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


def _auth_payload(email, minutes=60):
    expires = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return {'email': email, 'expires_at': expires.isoformat()}


@pytest.fixture
def sales_rep(db_session):
    """A committed sales rep row."""
    from app.models.sales_rep import SalesRep
    rep = SalesRep(code='JDU', name='Jean Dupont', email='jean.dupont@example.com')
    db_session.add(rep)
    db_session.commit()
    return rep


@pytest.fixture
def other_rep(db_session):
    from app.models.sales_rep import SalesRep
    rep = SalesRep(code='AMA', name='Alice Martin', email='alice.martin@example.com', is_admin=True)
    db_session.add(rep)
    db_session.commit()
    return rep


@pytest.fixture
def auth_context(app, sales_rep):
    """Request context with an active session for the sales rep."""
    from flask import session
    with app.test_request_context('/'):
        session['auth'] = _auth_payload(sales_rep.email)
        yield sales_rep


@pytest.fixture
def signed_in(client, sales_rep):
    """Test client with an active session cookie."""
    with client.session_transaction() as sess:
        sess['auth'] = _auth_payload(sales_rep.email)
    return client


@pytest.fixture
def make_auth_payload():
    return _auth_payload
