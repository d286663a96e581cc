"""Tests for app.services.client_needs."""
import pytest

from app.errors import ValidationError
from app.models.client_need import ClientNeed
from app.models.need import Need
from app.services.client_needs import (
    create_client_need, fetch_client_needs, update_client_need, delete_client_need,
    mark_client_need_as_read,
)


@pytest.fixture
def need(db_session):
    row = Need(title='Développeur Java', client='Acme')
    db_session.add(row)
    db_session.commit()
    return row


class TestCreateClientNeed:

    def test_title_filled_from_need(self, mock_schedule, need, sales_rep):
        result = create_client_need({'selectedNeedId': need.id, 'assignedTo': sales_rep.id})
        assert result['selectedNeedTitle'] == 'Développeur Java'
        kind, payload = mock_schedule.call_args.args
        assert kind == 'client_need'
        assert payload['label'] == 'Développeur Java'
        assert payload['salesRepCode'] == 'JDU'

    def test_explicit_title_kept(self, need, sales_rep):
        result = create_client_need({
            'selectedNeedId': need.id, 'selectedNeedTitle': 'Java senior', 'assignedTo': sales_rep.id,
        })
        assert result['selectedNeedTitle'] == 'Java senior'

    def test_unknown_need_rejected(self, db_session, mock_schedule, sales_rep):
        with pytest.raises(ValidationError) as exc:
            create_client_need({'selectedNeedId': 'ghost', 'assignedTo': sales_rep.id})
        assert exc.value.field == 'selectedNeedId'
        assert db_session.query(ClientNeed).count() == 0
        mock_schedule.assert_not_called()

    def test_without_need(self, mock_schedule, sales_rep):
        result = create_client_need({'textContent': 'Profil Java', 'assignedTo': sales_rep.id})
        assert result['selectedNeedId'] is None
        assert result['selectedNeedTitle'] == ''
        assert mock_schedule.call_args.args[1]['label'] == ''


class TestUpdateClientNeed:

    def test_changing_need_refreshes_title(self, db_session, need, sales_rep):
        other = Need(title='Data engineer', client='Globex')
        db_session.add(other)
        db_session.commit()
        created = create_client_need({'selectedNeedId': need.id, 'assignedTo': sales_rep.id})

        update_client_need(created['id'], {'selectedNeedId': other.id})

        db_session.expire_all()
        row = db_session.get(ClientNeed, created['id'])
        assert row.selected_need_id == other.id
        assert row.selected_need_title == 'Data engineer'

    def test_clearing_need_clears_title(self, db_session, need, sales_rep):
        created = create_client_need({'selectedNeedId': need.id, 'assignedTo': sales_rep.id})

        update_client_need(created['id'], {'selectedNeedId': None})

        db_session.expire_all()
        row = db_session.get(ClientNeed, created['id'])
        assert row.selected_need_id is None
        assert row.selected_need_title == ''

    def test_blank_need_from_form_clears_title(self, db_session, need, sales_rep):
        created = create_client_need({'selectedNeedId': need.id, 'assignedTo': sales_rep.id})

        update_client_need(created['id'], {'selectedNeedId': '', 'selectedNeedTitle': 'Ancien titre'})

        db_session.expire_all()
        row = db_session.get(ClientNeed, created['id'])
        assert row.selected_need_id is None
        assert row.selected_need_title == ''

    def test_other_fields_untouched(self, db_session, need, sales_rep):
        created = create_client_need({
            'selectedNeedId': need.id, 'phone': '0600000000', 'assignedTo': sales_rep.id,
        })
        update_client_need(created['id'], {'status': 'Traité'})
        row = db_session.get(ClientNeed, created['id'])
        assert row.status == 'Traité'
        assert row.phone == '0600000000'
        assert row.selected_need_title == 'Développeur Java'


class TestClientNeedLifecycle:

    def test_fetch_mark_delete(self, auth_context, db_session, need, sales_rep):
        created = create_client_need({'selectedNeedId': need.id, 'assignedTo': sales_rep.id})
        listed = fetch_client_needs()
        assert [p['id'] for p in listed] == [created['id']]
        assert listed[0]['availability'] == '-'

        assert mark_client_need_as_read(created['id']) is True
        assert db_session.get(ClientNeed, created['id']).is_read is True

        delete_client_need(created['id'])
        assert fetch_client_needs() == []
