"""Tests for the /functions endpoints."""
from unittest.mock import patch

import pytest

from app.errors import RecordNotFound


@pytest.fixture
def secret():
    with patch('app.routes.functions.FUNCTIONS_SECRET', 'shh'):
        yield {'Authorization': 'Bearer shh'}


class TestFunctionAuth:

    def test_missing_bearer(self, client, secret):
        resp = client.post('/functions/send-daily-rfp-summary', json={})
        assert resp.status_code == 401
        assert resp.get_json() == {'success': False, 'message': 'Unauthorized'}

    def test_wrong_bearer(self, client, secret):
        resp = client.post('/functions/send-daily-rfp-summary', json={},
                           headers={'Authorization': 'Bearer nope'})
        assert resp.status_code == 401

    def test_no_user_session_needed(self, client, secret):
        with patch.dict('app.routes.functions.FUNCTIONS',
                        {'send-daily-rfp-summary': lambda body: {'success': True, 'message': 'ok'}}):
            resp = client.post('/functions/send-daily-rfp-summary', json={}, headers=secret)
        assert resp.status_code == 200


class TestFunctionDispatch:

    def test_unknown_function(self, client, secret):
        resp = client.post('/functions/launch-rockets', json={}, headers=secret)
        assert resp.status_code == 404
        assert resp.get_json()['success'] is False

    @patch('app.routes.functions.send_record_notification')
    def test_prospect_notification(self, mock_send, client, secret):
        mock_send.return_value = {'success': True, 'message': 'Email sent successfully via SendGrid',
                                  'recipient': 'jean.dupont@example.com'}
        resp = client.post('/functions/send-prospect-notification',
                           json={'recordId': 'p1', 'assignedTo': 'r1'}, headers=secret)
        assert resp.status_code == 200
        mock_send.assert_called_once_with('prospect', {'recordId': 'p1', 'assignedTo': 'r1'})

    @pytest.mark.parametrize('name,kind', [
        ('send-rfp-notification', 'rfp'),
        ('send-reference-notification', 'reference'),
    ])
    @patch('app.routes.functions.send_record_notification')
    def test_record_notification_routing(self, mock_send, client, secret, name, kind):
        mock_send.return_value = {'success': True, 'message': 'Email sent successfully via SendGrid',
                                  'recipient': 'jean.dupont@example.com'}
        resp = client.post(f'/functions/{name}', json={'recordId': 'x1', 'assignedTo': 'r1'}, headers=secret)
        assert resp.status_code == 200
        mock_send.assert_called_once_with(kind, {'recordId': 'x1', 'assignedTo': 'r1'})

    @patch('app.routes.functions.send_record_notification')
    def test_reported_failure_is_500(self, mock_send, client, secret):
        mock_send.return_value = {'success': False, 'message': 'SendGrid API error: 401'}
        resp = client.post('/functions/send-client-need-notification', json={}, headers=secret)
        assert resp.status_code == 500
        mock_send.assert_called_once_with('client_need', {})

    @patch('app.routes.functions.send_record_notification', side_effect=RecordNotFound('Sales rep not found'))
    def test_service_error_shape(self, mock_send, client, secret):
        resp = client.post('/functions/send-prospect-notification', json={}, headers=secret)
        assert resp.status_code == 404
        assert resp.get_json() == {'success': False, 'message': 'Sales rep not found'}

    @patch('app.routes.functions.run_daily_summary', side_effect=RuntimeError('boom'))
    def test_unexpected_error_is_500(self, mock_run, client, secret):
        resp = client.post('/functions/send-daily-prospects-summary', json={}, headers=secret)
        assert resp.status_code == 500
        assert resp.get_json() == {'success': False, 'message': 'boom'}

    def test_daily_summary_end_to_end(self, client, secret, sales_rep):
        with patch('app.services.daily_summary.send_email') as mock_send:
            resp = client.post('/functions/send-daily-client-needs-summary', headers=secret)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data['totalSalesReps'] == 1
        assert data['results'][0]['reason'] == 'No pending client needs'
        mock_send.assert_not_called()
