# app/services/access.py
"""Who may see or touch which record."""
from app.core.exceptions import NotFoundError, PermissionDeniedError


def can_access_case(user, case) -> bool:
    if user.role == "police":
        return True
    if user.role == "client":
        return case.client_id == user.id
    if user.role == "lawyer":
        return case.lawyer_id == user.id
    return False


def load_case_for(storage, user, case_id: str):
    case = storage.get_case(case_id)
    if case is None:
        raise NotFoundError("Case not found")
    if not can_access_case(user, case):
        raise PermissionDeniedError("Insufficient permissions")
    return case


def is_request_party(user, request) -> bool:
    return user.id in (request.client_id, request.lawyer_id)


def load_request_for(storage, user, request_id: str):
    request = storage.get_case_request(request_id)
    if request is None:
        raise NotFoundError("Case request not found")
    if not is_request_party(user, request):
        raise PermissionDeniedError("Insufficient permissions")
    return request


def case_scope(storage, user) -> dict:
    """Filters that restrict case listings to what ``user`` may see."""
    if user.role == "client":
        return {"client_id": user.id}
    if user.role == "lawyer":
        return {"lawyer_id": user.id}
    if user.role == "police" and user.police_station_code:
        station = storage.get_police_station_by_code(user.police_station_code)
        if station:
            return {"police_station_id": station.id}
    return {}
