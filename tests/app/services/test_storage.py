"""Tests for app.services.storage — R2 file operations."""
from unittest.mock import patch

import pytest

from app.errors import StorageError
from app.services.storage import delete_file, extract_text, path_from_url, upload_file


class TestUploadFile:

    @patch('app.services.storage.R2_PUBLIC_URL', 'https://files.example.com')
    @patch('app.services.storage.r2_client')
    def test_upload(self, mock_r2):
        result = upload_file('CV Jean.PDF', b'%PDF', 'application/pdf')
        assert result['path'].startswith('cvs/')
        assert result['path'].endswith('.pdf')
        assert result['url'] == f"https://files.example.com/{result['path']}"
        assert 'CV Jean.PDF' in result['content']
        kwargs = mock_r2.put_object.call_args.kwargs
        assert kwargs['Key'] == result['path']
        assert kwargs['ContentType'] == 'application/pdf'

    @patch('app.services.storage.r2_client')
    def test_unique_keys(self, mock_r2):
        assert upload_file('a.txt', b'x', 'text/plain')['path'] != upload_file('a.txt', b'x', 'text/plain')['path']

    @patch('app.services.storage.r2_client', None)
    def test_not_configured(self):
        with pytest.raises(StorageError):
            upload_file('a.pdf', b'x')

    @patch('app.services.storage.r2_client')
    def test_put_failure(self, mock_r2):
        mock_r2.put_object.side_effect = RuntimeError('denied')
        with pytest.raises(StorageError, match='Upload failed'):
            upload_file('a.pdf', b'x')


class TestDeleteFile:

    @patch('app.services.storage.r2_client')
    def test_delete(self, mock_r2):
        delete_file('cvs/a.pdf')
        assert mock_r2.delete_object.call_args.kwargs['Key'] == 'cvs/a.pdf'

    @patch('app.services.storage.r2_client')
    def test_failure(self, mock_r2):
        mock_r2.delete_object.side_effect = RuntimeError('gone')
        with pytest.raises(StorageError):
            delete_file('cvs/a.pdf')


class TestHelpers:

    def test_text_decoded(self):
        assert extract_text('a.txt', 'Développeur'.encode(), 'text/plain') == 'Développeur'

    def test_binary_placeholder(self):
        assert extract_text('cv.pdf', b'%PDF', 'application/pdf').startswith('Fichier cv.pdf')

    def test_path_from_url(self):
        assert path_from_url('https://files.example.com/cvs/123-abc.pdf') == 'cvs/123-abc.pdf'
        assert path_from_url('') == ''
