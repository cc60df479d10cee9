# app/models/police_station.py
from sqlalchemy import Column, DateTime, String, Text

from app.db.base import Base
from app.utils.helpers import new_id, utcnow


class PoliceStation(Base):
    __tablename__ = "police_stations"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    code = Column(String(50), unique=True, nullable=False, index=True)
    city = Column(String(255), nullable=False, index=True)
    address = Column(Text, nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow)
