# app/models/case.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, JSON, String, Text

from app.db.base import Base
from app.utils.helpers import new_id, utcnow


class Case(Base):
    __tablename__ = "cases"
    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    case_type = Column(String(50), nullable=False)
    victim = Column(JSON, nullable=False)   # {"name", "phone", "email"}
    accused = Column(JSON, nullable=False)  # {"name", "phone", "address"}
    client_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    lawyer_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    police_station_id = Column(String(36), ForeignKey("police_stations.id"), nullable=False, index=True)
    city = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False, default="submitted", index=True)
    pnr = Column(String(100), nullable=True, unique=True)
    hearing_date = Column(Date, nullable=True)
    documents = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)
