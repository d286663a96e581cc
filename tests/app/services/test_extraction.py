"""Tests for app.services.extraction — OpenAI form pre-fill."""
import json
from unittest.mock import patch, MagicMock

import pytest

from app.errors import ExtractionError
from app.services.extraction import analyze_candidate, analyze_rfp


def _reply(payload):
    response = MagicMock()
    response.choices[0].message.content = payload if isinstance(payload, str) else json.dumps(payload)
    return response


class TestAnalyzeRfp:

    @patch('app.services.extraction.client')
    def test_normalizes_reply(self, mock_client):
        mock_client.chat.completions.create.return_value = _reply({
            'client': 'Acme', 'mission': None, 'location': '',
            'maxRate': '650', 'startDate': '06/01/2025', 'createdAt': 'dès que possible',
        })
        assert analyze_rfp('AO Acme ...') == {
            'client': 'Acme', 'mission': 'Non spécifié', 'location': 'Non spécifié',
            'maxRate': 650, 'startDate': '06/01/2025', 'createdAt': None,
        }
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs['response_format'] == {'type': 'json_object'}
        assert kwargs['messages'][1]['content'] == 'AO Acme ...'

    @patch('app.services.extraction.client')
    def test_bad_json(self, mock_client):
        mock_client.chat.completions.create.return_value = _reply('not json')
        with pytest.raises(ExtractionError):
            analyze_rfp('AO')

    @patch('app.services.extraction.client')
    def test_reply_not_an_object(self, mock_client):
        for payload in (['Acme', 'Java'], '"Acme"', 'null'):
            mock_client.chat.completions.create.return_value = _reply(payload)
            with pytest.raises(ExtractionError):
                analyze_rfp('AO')

    @patch('app.services.extraction.client')
    def test_api_error(self, mock_client):
        mock_client.chat.completions.create.side_effect = RuntimeError('rate limited')
        with pytest.raises(ExtractionError):
            analyze_rfp('AO')

    @patch('app.services.extraction.client')
    def test_empty_content(self, mock_client):
        with pytest.raises(ExtractionError):
            analyze_rfp('   ')
        mock_client.chat.completions.create.assert_not_called()

    @patch('app.services.extraction.client', None)
    def test_not_configured(self):
        with pytest.raises(ExtractionError):
            analyze_rfp('AO')


class TestAnalyzeCandidate:

    @patch('app.services.extraction.client')
    def test_normalizes_reply(self, mock_client):
        mock_client.chat.completions.create.return_value = _reply({
            'availability': 'Immédiate', 'dailyRate': 600, 'salaryExpectations': 'beaucoup',
            'residence': 'Lille', 'mobility': '', 'phone': None, 'email': 'paul@example.com',
        })
        assert analyze_candidate('CV Paul') == {
            'availability': 'Immédiate', 'residence': 'Lille', 'mobility': None,
            'phone': None, 'email': 'paul@example.com',
            'dailyRate': 600, 'salaryExpectations': None,
        }
