# app/schemas/police_station.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class PoliceStationCreate(BaseModel):
    name: str
    code: str  # e.g. DEL-001
    city: str
    address: str
    phone: str
    email: str


class PoliceStationOut(PoliceStationCreate):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
