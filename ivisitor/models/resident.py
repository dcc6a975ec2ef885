# ivisitor/models/resident.py
"""
Residents table — the people being visited.
Email is the natural key; rows are auto-provisioned by the first
visitor request that names a new resident email.
"""

from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from ivisitor.database import Base


class Resident(Base):
    __tablename__ = "residents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(254), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    visitors = relationship("Visitor", back_populates="resident")

    def __repr__(self):
        return f"<Resident {self.id} email={self.email}>"
