"""
Reference model — marketplace reference contacts gathered for a client need.
"""
from sqlalchemy import Column, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.config import STATUS_TO_PROCESS
from app.database import Base, new_id, utcnow


class Reference(Base):
    __tablename__ = 'reference_marketplace'

    id = Column(Text, primary_key=True, default=new_id)
    client = Column(Text, nullable=False)
    need = Column(Text, default='')
    tech_name = Column(Text, nullable=True)
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default=STATUS_TO_PROCESS)
    assigned_to = Column(Text, ForeignKey('sales_reps.id'), nullable=False)
    comments = Column(Text, nullable=True)
    created_by = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    sales_rep = relationship('SalesRep', lazy='joined')
