"""Field fallbacks used when a lawyer turns a case request into a case."""

import pytest

from app.core.exceptions import CaseValidationError
from app.schemas.case_request import CaseOverrides, CaseRequestOut, RequestAccused, RequestVictim
from app.schemas.police_station import PoliceStationOut
from app.schemas.user import UserOut
from app.services.case_builder import build_case_from_request, resolve_police_station


def _station(station_id: str, code: str, city: str) -> PoliceStationOut:
    return PoliceStationOut(
        id=station_id,
        name=code,
        code=code,
        city=city,
        address="Main road",
        phone="100",
        email=f"{code.lower()}@police.gov.in",
    )


@pytest.fixture
def stations():
    return [
        _station("s-mum", "MUM-001", "mumbai"),
        _station("s-del", "DEL-001", "delhi"),
        _station("s-pun", "PUN-001", "pune"),
    ]


@pytest.fixture
def requester() -> UserOut:
    return UserOut(
        id="client-1",
        name="Kavya Nair",
        email="kavya.nair@legalcase.io",
        phone="9000000001",
        role="client",
        city="pune",
    )


def _request(**fields) -> CaseRequestOut:
    base = {
        "id": "req-1",
        "client_id": "client-1",
        "lawyer_id": "lawyer-1",
        "title": "Land dispute",
        "description": "Neighbour built over the boundary wall",
        "victim_name": "",
        "accused_name": "",
        "client_phone": "",
        "status": "accepted",
    }
    base.update(fields)
    return CaseRequestOut(**base)


# =============================================================================
# Police station resolution
# =============================================================================


def test_preferred_station_wins(stations):
    assert resolve_police_station("delhi", stations, None, "s-pun") == "s-pun"


def test_unknown_preferred_station_is_an_error(stations):
    with pytest.raises(CaseValidationError):
        resolve_police_station("delhi", stations, "nope")


def test_station_in_city_then_first_station(stations):
    assert resolve_police_station("Delhi", stations) == "s-del"
    assert resolve_police_station("jaipur", stations) == "s-mum"


def test_no_stations_is_an_error():
    with pytest.raises(CaseValidationError):
        resolve_police_station("delhi", [])


# =============================================================================
# Field fallbacks
# =============================================================================


def test_everything_missing_falls_back_to_client_and_defaults(stations, requester):
    data = build_case_from_request(_request(), requester, stations)
    assert data["victim"] == {"name": "Kavya Nair", "phone": "9000000001", "email": "kavya.nair@legalcase.io"}
    assert data["accused"] == {"name": "Unknown", "phone": None, "address": None}
    assert data["case_type"] == "civil"
    assert data["city"] == "pune"
    assert data["police_station_id"] == "s-pun"
    assert data["status"] == "submitted"


def test_no_client_uses_constant_defaults(stations):
    data = build_case_from_request(_request(), None, stations, default_city="delhi")
    assert data["victim"]["name"] == "Unknown"
    assert data["victim"]["phone"] == "0000000000"
    assert data["victim"]["email"] is None
    assert data["city"] == "delhi"
    assert data["police_station_id"] == "s-del"


def test_request_values_beat_client(stations, requester):
    request = _request(
        victim_name="Anil Nair",
        client_phone="9111111111",
        client_email="anil.nair@legalcase.io",
        accused=RequestAccused(name="Ignored", phone="9222222222", address="12 MG Road"),
        accused_name="Suresh Pillai",
        case_type="fraud",
        city="mumbai",
    )
    data = build_case_from_request(request, requester, stations)
    assert data["victim"] == {"name": "Anil Nair", "phone": "9111111111", "email": "anil.nair@legalcase.io"}
    assert data["accused"] == {"name": "Suresh Pillai", "phone": "9222222222", "address": "12 MG Road"}
    assert data["case_type"] == "fraud"
    assert data["police_station_id"] == "s-mum"


def test_nested_victim_used_when_flat_fields_blank(stations, requester):
    request = _request(victim=RequestVictim(name="Leela", phone="9333333333", email="leela@legalcase.io"))
    data = build_case_from_request(request, requester, stations)
    assert data["victim"] == {"name": "Leela", "phone": "9333333333", "email": "leela@legalcase.io"}


def test_overrides_beat_everything(stations, requester):
    request = _request(victim_name="Anil Nair", city="mumbai", police_station_id="s-mum")
    overrides = CaseOverrides(
        title="  Boundary encroachment  ",
        victim_name="Anil K. Nair",
        city="delhi",
        police_station_id="s-del",
    )
    data = build_case_from_request(request, requester, stations, overrides)
    assert data["title"] == "Boundary encroachment"
    assert data["victim"]["name"] == "Anil K. Nair"
    assert data["city"] == "delhi"
    assert data["police_station_id"] == "s-del"


def test_blank_override_is_ignored(stations, requester):
    data = build_case_from_request(_request(victim_name="Anil Nair"), requester, stations, CaseOverrides(victim_name="   "))
    assert data["victim"]["name"] == "Anil Nair"
