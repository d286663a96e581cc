"""Tests for app.services.sales_reps."""
from unittest.mock import patch

import pytest

from app.errors import PermissionDenied, ServiceError, ValidationError
from app.services.sales_reps import (
    create_sales_rep, fetch_sales_reps, get_sales_rep, get_sales_rep_code,
    get_sales_rep_by_email, is_admin,
)


class TestFetchSalesReps:

    def test_ordered_by_code(self, auth_context, other_rep):
        assert [r['code'] for r in fetch_sales_reps()] == ['AMA', 'JDU']

    def test_permission_denied_gives_empty_list(self, auth_context):
        with patch('app.services.sales_reps.storage_session', side_effect=PermissionDenied()):
            assert fetch_sales_reps() == []


class TestLookups:

    def test_get_and_code(self, sales_rep):
        assert get_sales_rep(sales_rep.id)['name'] == 'Jean Dupont'
        assert get_sales_rep_code(sales_rep.id) == 'JDU'
        assert get_sales_rep('ghost') is None
        assert get_sales_rep_code('ghost') is None

    def test_email_lookup_case_insensitive(self, sales_rep):
        assert get_sales_rep_by_email('  Jean.Dupont@EXAMPLE.com ')['id'] == sales_rep.id
        assert get_sales_rep_by_email('') is None

    def test_is_admin(self, sales_rep, other_rep):
        assert is_admin('alice.martin@example.com') is True
        assert is_admin('jean.dupont@example.com') is False
        assert is_admin('nobody@example.com') is False


class TestCreateSalesRep:

    def test_normalized(self):
        rep = create_sales_rep(' pdu ', 'Pierre Durand', ' Pierre.Durand@Example.com')
        assert rep['code'] == 'PDU'
        assert rep['email'] == 'pierre.durand@example.com'
        assert rep['isAdmin'] is False

    def test_required(self):
        with pytest.raises(ValidationError) as exc:
            create_sales_rep('PDU', '', 'p@example.com')
        assert exc.value.field == 'name'

    def test_duplicate_code(self, sales_rep):
        with pytest.raises(ServiceError):
            create_sales_rep('JDU', 'Jean Autre', 'jean.autre@example.com')
