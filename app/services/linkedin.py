"""
LinkedIn sourcing links attached to RFPs.
"""
import logging
from typing import Dict, Iterable, List

from sqlalchemy import func

from app.errors import RecordNotFound, ValidationError
from app.models.linkedin_link import LinkedInLink
from app.models.rfp import RFP
from app.services.dates import to_iso
from app.services.records import storage_session, delete_row

logger = logging.getLogger('services.linkedin')


def to_app(link: LinkedInLink) -> Dict:
    return {
        'id': link.id,
        'rfpId': link.rfp_id,
        'url': link.url,
        'createdAt': to_iso(link.created_at),
    }


def fetch_linkedin_links(rfp_id: str) -> List[Dict]:
    with storage_session('fetching linkedin links') as session:
        links = (
            session.query(LinkedInLink)
            .filter(LinkedInLink.rfp_id == rfp_id)
            .order_by(LinkedInLink.created_at.desc())
            .all()
        )
    return [to_app(l) for l in links]


def add_linkedin_links(rfp_id: str, urls: Iterable[str]) -> List[Dict]:
    """Attach URLs to an existing RFP. Blank entries are dropped."""
    cleaned = [u.strip() for u in urls or [] if u and u.strip()]
    if not cleaned:
        raise ValidationError("At least one URL is required", field='urls')

    with storage_session('adding linkedin links') as session:
        if session.get(RFP, rfp_id) is None:
            raise RecordNotFound('RFP not found')
        links = [LinkedInLink(rfp_id=rfp_id, url=url) for url in cleaned]
        session.add_all(links)
        session.commit()
        logger.info("Added %d linkedin links to rfp %s", len(links), rfp_id)
        return [to_app(l) for l in links]


def delete_linkedin_link(link_id: str) -> None:
    delete_row(LinkedInLink, link_id, 'deleting linkedin link')


def get_linkedin_link_counts() -> Dict[str, int]:
    """{rfp_id: number of links} for every RFP that has at least one."""
    with storage_session('counting linkedin links') as session:
        rows = (
            session.query(LinkedInLink.rfp_id, func.count(LinkedInLink.id))
            .group_by(LinkedInLink.rfp_id)
            .all()
        )
    return {rfp_id: count for rfp_id, count in rows}
