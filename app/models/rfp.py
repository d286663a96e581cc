"""
RFP model — an inbound request-for-proposal ("AO") tracked through a status lifecycle.
"""
from sqlalchemy import Column, Text, Integer, Boolean, DateTime, ForeignKey, Index

from app.config import STATUS_TO_PROCESS
from app.database import Base, new_id, utcnow


class RFP(Base):
    __tablename__ = 'rfps'

    id = Column(Text, primary_key=True, default=new_id)
    client = Column(Text, default='')
    mission = Column(Text, default='')
    location = Column(Text, default='')
    max_rate = Column(Integer, nullable=True)  # daily rate, currency-less
    created_at = Column(DateTime(timezone=True), default=utcnow)
    start_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(Text, nullable=False, default=STATUS_TO_PROCESS)
    assigned_to = Column(Text, ForeignKey('sales_reps.id'), nullable=False)
    raw_content = Column(Text, default='')
    is_read = Column(Boolean, nullable=False, default=False)
    comments = Column(Text, nullable=True)

    __table_args__ = (
        Index('ix_rfps_assigned_status', 'assigned_to', 'status'),
    )
