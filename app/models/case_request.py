# app/models/case_request.py
from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, Text

from app.db.base import Base
from app.utils.helpers import new_id, utcnow


class CaseRequest(Base):
    __tablename__ = "case_requests"
    id = Column(String(36), primary_key=True, default=new_id)
    client_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    lawyer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # the basic info a client fills in
    victim_name = Column(String(255), nullable=False)
    accused_name = Column(String(255), nullable=False)
    client_phone = Column(String(20), nullable=False)
    client_email = Column(String(255), nullable=True)
    documents = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default="pending", index=True)
    lawyer_response = Column(Text, nullable=True)

    # optional detail, usually completed by the lawyer
    case_type = Column(String(50), nullable=True)
    victim = Column(JSON, nullable=True)
    accused = Column(JSON, nullable=True)
    city = Column(String(255), nullable=True)
    police_station_id = Column(String(36), ForeignKey("police_stations.id"), nullable=True)

    case_id = Column(String(36), ForeignKey("cases.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)
