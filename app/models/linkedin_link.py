"""
LinkedInLink model — sourcing profile URLs attached to an RFP.
"""
from sqlalchemy import Column, Text, DateTime, ForeignKey

from app.database import Base, new_id, utcnow


class LinkedInLink(Base):
    __tablename__ = 'linkedin_links'

    id = Column(Text, primary_key=True, default=new_id)
    rfp_id = Column(Text, ForeignKey('rfps.id', ondelete='CASCADE'), nullable=False, index=True)
    url = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
