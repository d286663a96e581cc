"""Tests for app.services.email — SendGrid sending."""
from unittest.mock import patch, MagicMock

from app.services.email import send_email


def _response(status=202, headers=None):
    resp = MagicMock()
    resp.status_code = status
    resp.headers = headers if headers is not None else {'X-Message-Id': 'msg-123'}
    resp.body = b''
    return resp


class TestSendEmail:

    @patch('app.services.email.sendgrid_client')
    def test_success(self, mock_client):
        mock_client.send.return_value = _response()
        result = send_email('jean.dupont@example.com', 'Sujet', '<p>Hi</p>', 'Hi')
        assert result == {'success': True, 'messageId': 'msg-123'}
        message = mock_client.send.call_args.args[0]
        assert message.subject.subject == 'Sujet'

    @patch('app.services.email.sendgrid_client')
    def test_missing_message_id(self, mock_client):
        mock_client.send.return_value = _response(headers={})
        assert send_email('a@example.com', 's', 'h', 't')['messageId'] == 'unknown'

    @patch('app.services.email.sendgrid_client', None)
    def test_not_configured(self):
        result = send_email('a@example.com', 's', 'h', 't')
        assert result['success'] is False
        assert 'SENDGRID_API_KEY' in result['error']

    @patch('app.services.email.sendgrid_client')
    def test_api_error_status(self, mock_client):
        mock_client.send.return_value = _response(status=400)
        result = send_email('a@example.com', 's', 'h', 't')
        assert result == {'success': False, 'error': 'SendGrid API error: 400'}

    @patch('app.services.email.sendgrid_client')
    def test_exception_not_raised(self, mock_client):
        mock_client.send.side_effect = RuntimeError('unauthorized')
        result = send_email('a@example.com', 's', 'h', 't')
        assert result['success'] is False
        assert 'unauthorized' in result['error']
