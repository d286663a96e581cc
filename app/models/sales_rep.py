"""
SalesRep model — internal staff who own assigned records and receive emails.
"""
from sqlalchemy import Column, Text, Boolean, DateTime

from app.database import Base, new_id, utcnow


class SalesRep(Base):
    __tablename__ = 'sales_reps'

    id = Column(Text, primary_key=True, default=new_id)
    code = Column(Text, nullable=False, unique=True)  # short mnemonic, e.g. "JDU"
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    @property
    def first_name(self) -> str:
        return (self.name or '').split(' ')[0]
