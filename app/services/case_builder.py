# app/services/case_builder.py
"""Turns a loose case request into the fields of a formal case.

Each field takes the first non-empty value, in order, from the lawyer's
explicit overrides, the case request, the requesting client, and finally a
default:

    victim name    override -> request.victim_name -> request.victim.name -> client.name -> "Unknown"
    victim phone   override -> request.victim.phone -> request.client_phone -> client.phone -> "0000000000"
    victim email   override -> request.victim.email -> request.client_email -> client.email -> None
    accused name   override -> request.accused_name -> request.accused.name -> "Unknown"
    city           override -> request.city -> client.city -> DEFAULT_CITY
    police station override -> request.police_station_id -> first station in city -> first station
"""
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import CaseValidationError
from app.schemas.case_request import CaseOverrides, CaseRequestOut
from app.schemas.police_station import PoliceStationOut
from app.schemas.user import UserOut
from app.utils.helpers import first_filled

UNKNOWN_NAME = "Unknown"
UNKNOWN_PHONE = "0000000000"
DEFAULT_CASE_TYPE = "civil"


def resolve_police_station(
    city: str,
    stations: List[PoliceStationOut],
    *preferred_ids: Optional[str],
) -> str:
    known = {s.id for s in stations}
    for station_id in preferred_ids:
        if not station_id:
            continue
        if station_id not in known:
            raise CaseValidationError(f"Police station {station_id} does not exist")
        return station_id

    in_city = [s for s in stations if s.city.lower() == (city or "").lower()]
    if in_city:
        return in_city[0].id
    if stations:
        return stations[0].id
    raise CaseValidationError("No police station is available to assign this case to")


def build_case_from_request(
    request: CaseRequestOut,
    client: Optional[UserOut],
    stations: List[PoliceStationOut],
    overrides: Optional[CaseOverrides] = None,
    default_city: Optional[str] = None,
) -> dict:
    o = overrides or CaseOverrides()
    victim = request.victim
    accused = request.accused

    city = first_filled(o.city, request.city, client.city if client else None, default=default_city or settings.DEFAULT_CITY)

    return {
        "title": first_filled(o.title, request.title),
        "description": first_filled(o.description, request.description),
        "case_type": first_filled(o.case_type, request.case_type, default=DEFAULT_CASE_TYPE),
        "victim": {
            "name": first_filled(
                o.victim_name,
                request.victim_name,
                victim.name if victim else None,
                client.name if client else None,
                default=UNKNOWN_NAME,
            ),
            "phone": first_filled(
                o.victim_phone,
                victim.phone if victim else None,
                request.client_phone,
                client.phone if client else None,
                default=UNKNOWN_PHONE,
            ),
            "email": first_filled(
                o.victim_email,
                victim.email if victim else None,
                request.client_email,
                client.email if client else None,
            ),
        },
        "accused": {
            "name": first_filled(
                o.accused_name,
                request.accused_name,
                accused.name if accused else None,
                default=UNKNOWN_NAME,
            ),
            "phone": first_filled(o.accused_phone, accused.phone if accused else None),
            "address": first_filled(o.accused_address, accused.address if accused else None),
        },
        "client_id": request.client_id,
        "lawyer_id": request.lawyer_id,
        "city": city,
        "police_station_id": resolve_police_station(city, stations, o.police_station_id, request.police_station_id),
        "status": "submitted",
        "documents": list(request.documents or []),
    }
