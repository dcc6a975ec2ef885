# ivisitor/models/visitor.py
"""
Visitor requests table.
One row per visit request, mutated in place as it moves through
approval (status), guard verification (in_date/in_time) and exit (out_date/out_time).
Rows are never deleted.
"""

from sqlalchemy import Column, Integer, String, Date, Time, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import relationship
from ivisitor.database import Base

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
VISITOR_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)


class Visitor(Base):
    __tablename__ = "visitors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    visitor_name = Column(String(200), nullable=False)
    visitor_email = Column(String(254), nullable=False)
    resident_name = Column(String(200))
    resident_email = Column(String(254), nullable=False, index=True)
    visit_reason = Column(Text, nullable=False)
    car_number = Column(String(50))
    status = Column(String(20), nullable=False, default=STATUS_PENDING, index=True)  # pending | approved | rejected
    verification_code = Column(String(4), nullable=False)
    approval_token = Column(String(64), nullable=False, index=True)
    in_date = Column(Date)
    in_time = Column(Time)
    out_date = Column(Date)
    out_time = Column(Time)
    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)
    resident_id = Column(Integer, ForeignKey("residents.id"), index=True)

    resident = relationship("Resident", back_populates="visitors")

    def __repr__(self):
        return f"<Visitor {self.id} name={self.visitor_name} status={self.status}>"
