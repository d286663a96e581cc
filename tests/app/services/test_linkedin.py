"""Tests for app.services.linkedin."""
import pytest

from app.errors import RecordNotFound, ValidationError
from app.services.linkedin import (
    add_linkedin_links, fetch_linkedin_links, delete_linkedin_link, get_linkedin_link_counts,
)
from app.services.rfps import create_rfp


@pytest.fixture
def rfp_id(sales_rep):
    return create_rfp({'client': 'Acme', 'assignedTo': sales_rep.id})['id']


class TestAddLinkedinLinks:

    def test_blank_entries_dropped(self, rfp_id):
        links = add_linkedin_links(rfp_id, [' https://linkedin.com/in/a ', '', '   ', None])
        assert [l['url'] for l in links] == ['https://linkedin.com/in/a']
        assert links[0]['rfpId'] == rfp_id

    def test_nothing_left(self, rfp_id):
        with pytest.raises(ValidationError):
            add_linkedin_links(rfp_id, ['', '  '])

    def test_unknown_rfp(self, sales_rep):
        with pytest.raises(RecordNotFound, match='RFP not found'):
            add_linkedin_links('ghost', ['https://linkedin.com/in/a'])


class TestLinkedinCounts:

    def test_counts_per_rfp(self, sales_rep, rfp_id):
        other = create_rfp({'client': 'Globex', 'assignedTo': sales_rep.id})['id']
        add_linkedin_links(rfp_id, ['https://linkedin.com/in/a', 'https://linkedin.com/in/b'])
        add_linkedin_links(other, ['https://linkedin.com/in/c'])
        assert get_linkedin_link_counts() == {rfp_id: 2, other: 1}

    def test_no_links(self, sales_rep):
        assert get_linkedin_link_counts() == {}

    def test_delete(self, rfp_id):
        link = add_linkedin_links(rfp_id, ['https://linkedin.com/in/a'])[0]
        delete_linkedin_link(link['id'])
        assert fetch_linkedin_links(rfp_id) == []
        with pytest.raises(RecordNotFound):
            delete_linkedin_link(link['id'])
