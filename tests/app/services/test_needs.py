"""Tests for app.services.needs."""
import pytest

from app.errors import AuthenticationRequired, RecordNotFound, ValidationError
from app.models.need import Need
from app.services.needs import create_need, fetch_needs, fetch_open_needs, update_need, delete_need


class TestCreateNeed:

    def test_defaults(self, auth_context):
        result = create_need({'title': 'Développeur Java', 'client': 'Acme'})
        assert result['status'] == 'Ouvert'
        assert result['createdBy'] == 'jean.dupont@example.com'
        assert result['startDate'] is None
        assert result['description'] == ''

    def test_requires_title_and_client(self, auth_context):
        with pytest.raises(ValidationError) as exc:
            create_need({'client': 'Acme'})
        assert exc.value.field == 'title'
        with pytest.raises(ValidationError) as exc:
            create_need({'title': 'Java'})
        assert exc.value.field == 'client'

    def test_requires_session(self, app):
        with app.test_request_context('/'):
            with pytest.raises(AuthenticationRequired):
                create_need({'title': 'Java', 'client': 'Acme'})

    def test_dates_and_rate(self, auth_context):
        result = create_need({
            'title': 'Java', 'client': 'Acme', 'startDate': '01/03/2025', 'maxRate': '700',
        })
        assert result['startDate'] == '01/03/2025'
        assert result['maxRate'] == 700

    def test_invalid_status(self, auth_context):
        with pytest.raises(ValidationError):
            create_need({'title': 'Java', 'client': 'Acme', 'status': 'Fermé'})


class TestFetchNeeds:

    def test_open_filter(self, auth_context, db_session):
        for title, status in (('A', 'Ouvert'), ('B', 'En cours'), ('C', 'Pourvu'), ('D', 'Annulé')):
            db_session.add(Need(title=title, client='Acme', status=status))
        db_session.commit()

        assert {n['title'] for n in fetch_needs()} == {'A', 'B', 'C', 'D'}
        assert {n['title'] for n in fetch_open_needs()} == {'A', 'B'}


class TestUpdateDeleteNeed:

    def test_update(self, auth_context, db_session):
        need = create_need({'title': 'Java', 'client': 'Acme'})
        update_need(need['id'], {'status': 'Pourvu'})
        row = db_session.get(Need, need['id'])
        assert row.status == 'Pourvu'
        assert row.title == 'Java'

    def test_delete_missing(self, auth_context):
        with pytest.raises(RecordNotFound):
            delete_need('missing')

    def test_delete(self, auth_context, db_session):
        need = create_need({'title': 'Java', 'client': 'Acme'})
        delete_need(need['id'])
        assert db_session.get(Need, need['id']) is None
