# app/schemas/case_request.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from app.schemas.case import CaseOut, CaseType
from app.schemas.police_station import PoliceStationOut
from app.schemas.user import UserOut

RequestStatus = Literal["pending", "accepted", "rejected"]


class RequestVictim(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class RequestAccused(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class CaseRequestCreate(BaseModel):
    lawyer_id: str
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    victim_name: str = Field(..., min_length=1)
    accused_name: str = Field(..., min_length=1)
    client_phone: str = Field(..., min_length=5, max_length=20)
    client_email: Optional[EmailStr] = None
    case_type: Optional[CaseType] = None
    victim: Optional[RequestVictim] = None
    accused: Optional[RequestAccused] = None
    city: Optional[str] = None
    police_station_id: Optional[str] = None


class CaseRequestOut(BaseModel):
    id: str
    client_id: str
    lawyer_id: str
    title: str
    description: str
    victim_name: str
    accused_name: str
    client_phone: str
    client_email: Optional[str] = None
    documents: List[str] = []
    status: RequestStatus
    lawyer_response: Optional[str] = None
    case_type: Optional[CaseType] = None
    victim: Optional[RequestVictim] = None
    accused: Optional[RequestAccused] = None
    city: Optional[str] = None
    police_station_id: Optional[str] = None
    case_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CaseOverrides(BaseModel):
    """Values a lawyer supplies explicitly when turning a request into a case."""

    title: Optional[str] = None
    description: Optional[str] = None
    case_type: Optional[CaseType] = None
    victim_name: Optional[str] = None
    victim_phone: Optional[str] = None
    victim_email: Optional[str] = None
    accused_name: Optional[str] = None
    accused_phone: Optional[str] = None
    accused_address: Optional[str] = None
    city: Optional[str] = None
    police_station_id: Optional[str] = None


class CaseRequestRespond(BaseModel):
    status: Literal["accepted", "rejected"]
    lawyer_response: Optional[str] = None
    auto_create: bool = True
    overrides: Optional[CaseOverrides] = None


class CaseRequestResult(BaseModel):
    case_request: CaseRequestOut
    case: Optional[CaseOut] = None


class CaseRequestDetails(BaseModel):
    case_request: CaseRequestOut
    client: Optional[UserOut] = None
    lawyer: Optional[UserOut] = None
    available_police_stations: List[PoliceStationOut] = []
