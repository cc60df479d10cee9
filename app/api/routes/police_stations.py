# app/api/routes/police_stations.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_storage
from app.schemas.police_station import PoliceStationOut

router = APIRouter()


@router.get("", response_model=List[PoliceStationOut])
def list_police_stations(city: Optional[str] = None, storage=Depends(get_storage)):
    return storage.list_police_stations(city=city)


@router.get("/{station_id}", response_model=PoliceStationOut)
def get_police_station(station_id: str, storage=Depends(get_storage)):
    station = storage.get_police_station(station_id)
    if not station:
        raise HTTPException(status_code=404, detail="Police station not found")
    return station
