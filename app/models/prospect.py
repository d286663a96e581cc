"""
Prospect model — a candidate profile recorded for general business development.
"""
from sqlalchemy import Column, Text, Integer, Boolean, DateTime, ForeignKey, Index

from app.config import STATUS_TO_PROCESS
from app.database import Base, new_id, utcnow


class Prospect(Base):
    __tablename__ = 'prospects'

    id = Column(Text, primary_key=True, default=new_id)
    text_content = Column(Text, default='')
    file_name = Column(Text, nullable=True)
    file_url = Column(Text, nullable=True)
    file_content = Column(Text, nullable=True)
    target_account = Column(Text, default='')
    availability = Column(Text, nullable=True)
    daily_rate = Column(Integer, nullable=True)
    salary_expectations = Column(Integer, nullable=True)
    residence = Column(Text, nullable=True)
    mobility = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default=STATUS_TO_PROCESS)
    assigned_to = Column(Text, ForeignKey('sales_reps.id'), nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    comments = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        Index('ix_prospects_assigned_status', 'assigned_to', 'status'),
    )
