# app/api/routes/lawyers.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_storage
from app.schemas.user import LawyerOut

router = APIRouter()


@router.get("", response_model=List[LawyerOut])
def list_lawyers(city: Optional[str] = None, case_type: Optional[str] = None, storage=Depends(get_storage)):
    """
    Browse lawyers, optionally by city and by case type they specialise in
    """
    return [LawyerOut.from_user(u) for u in storage.get_lawyers(city=city, case_type=case_type)]


@router.get("/{lawyer_id}", response_model=LawyerOut)
def get_lawyer(lawyer_id: str, storage=Depends(get_storage)):
    user = storage.get_user(lawyer_id)
    if not user or user.role != "lawyer":
        raise HTTPException(status_code=404, detail="Lawyer not found")
    return LawyerOut.from_user(user)
