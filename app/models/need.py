"""
Need model — an open client requirement that client-need profiles are matched to.
"""
from sqlalchemy import Column, Text, Integer, DateTime

from app.database import Base, new_id, utcnow


class Need(Base):
    __tablename__ = 'needs'

    id = Column(Text, primary_key=True, default=new_id)
    title = Column(Text, nullable=False)
    client = Column(Text, nullable=False)
    description = Column(Text, default='')
    location = Column(Text, default='')
    skills = Column(Text, default='')
    max_rate = Column(Integer, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(Text, nullable=False, default='Ouvert')
    created_by = Column(Text, nullable=True)  # email of the signed-in user
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
