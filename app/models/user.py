# app/models/user.py
from sqlalchemy import Column, DateTime, Float, Integer, JSON, String, Text

from app.db.base import Base
from app.utils.helpers import new_id, utcnow


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)
    role = Column(String(20), nullable=False, index=True)  # "client" | "lawyer" | "police"
    city = Column(String(255), nullable=True)
    # lawyer-only
    specialization = Column(JSON, nullable=True)
    experience = Column(Integer, nullable=True)
    stats = Column(JSON, nullable=True)
    rating = Column(Float, default=0)
    description = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    # police-only
    police_station_code = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)
