# app/schemas/case.py
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.schemas.police_station import PoliceStationOut

CaseType = Literal["fraud", "theft", "murder", "civil", "corporate"]
CaseStatus = Literal["submitted", "under_review", "approved", "rejected"]


class VictimInfo(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None


class AccusedInfo(BaseModel):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    address: Optional[str] = None


class CaseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    case_type: CaseType
    victim: VictimInfo
    accused: AccusedInfo
    police_station_id: str
    city: str = Field(..., min_length=1)
    lawyer_id: Optional[str] = None


class CaseOut(BaseModel):
    id: str
    title: str
    description: str
    case_type: CaseType
    victim: VictimInfo
    accused: AccusedInfo
    client_id: str
    lawyer_id: Optional[str] = None
    police_station_id: str
    city: str
    status: CaseStatus
    pnr: Optional[str] = None
    hearing_date: Optional[date] = None
    documents: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CaseDetailOut(CaseOut):
    police_station: Optional[PoliceStationOut] = None


class CaseRejectRequest(BaseModel):
    reason: Optional[str] = None


class CaseDocumentsOut(BaseModel):
    message: str
    documents: List[str]
