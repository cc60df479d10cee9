"""Client-to-lawyer case requests and turning them into formal cases."""

import pytest


@pytest.fixture
def request_payload(lawyer_user):
    return {
        "lawyer_id": lawyer_user["user"]["id"],
        "title": "Cheque fraud",
        "description": "Cheques drawn on my account without consent",
        "victim_name": "Asha Verma",
        "accused_name": "Vikram Malhotra",
        "client_phone": "9876500000",
        "case_type": "fraud",
    }


@pytest.fixture
def case_request(client, client_user, request_payload):
    resp = client.post("/api/case-requests", json=request_payload, headers=client_user["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()


# =============================================================================
# Creating and reading requests
# =============================================================================


def test_request_starts_pending_and_alerts_lawyer(client, case_request, lawyer_user, mailer):
    assert case_request["status"] == "pending"
    assert case_request["case_id"] is None

    notes = client.get("/api/notifications", headers=lawyer_user["headers"]).json()
    assert any(n["type"] == "case_request" and n["case_request_id"] == case_request["id"] for n in notes)
    assert mailer.subjects_for("sarah.johnson@lawfirm.com") == ["New Case Request: Cheque fraud"]


def test_request_to_non_lawyer_is_rejected(client, client_user, other_client, request_payload):
    request_payload["lawyer_id"] = other_client["user"]["id"]
    resp = client.post("/api/case-requests", json=request_payload, headers=client_user["headers"])
    assert resp.status_code == 400


def test_only_clients_send_requests(client, lawyer_user, request_payload):
    resp = client.post("/api/case-requests", json=request_payload, headers=lawyer_user["headers"])
    assert resp.status_code == 403


def test_listing_by_role(client, case_request, client_user, lawyer_user, other_lawyer, police_user):
    assert [r["id"] for r in client.get("/api/case-requests", headers=client_user["headers"]).json()] == [case_request["id"]]
    assert [r["id"] for r in client.get("/api/case-requests", headers=lawyer_user["headers"]).json()] == [case_request["id"]]
    assert client.get("/api/case-requests", headers=other_lawyer["headers"]).json() == []
    assert client.get("/api/case-requests", headers=police_user["headers"]).status_code == 403


def test_non_party_cannot_read_request(client, case_request, other_client):
    resp = client.get(f"/api/case-requests/{case_request['id']}", headers=other_client["headers"])
    assert resp.status_code == 403


def test_details_list_stations_in_client_city(client, case_request, lawyer_user):
    resp = client.get(f"/api/case-requests/{case_request['id']}/details", headers=lawyer_user["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["client"]["name"] == "Asha Verma"
    assert body["lawyer"]["name"] == "Sarah Johnson"
    assert sorted(s["code"] for s in body["available_police_stations"]) == ["DEL-001", "DEL-002"]


# =============================================================================
# Responding
# =============================================================================


def test_accept_creates_case(client, case_request, lawyer_user, client_user, station_ids):
    resp = client.patch(
        f"/api/case-requests/{case_request['id']}",
        json={"status": "accepted", "lawyer_response": "Happy to help"},
        headers=lawyer_user["headers"],
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["case_request"]["status"] == "accepted"
    case = body["case"]
    assert body["case_request"]["case_id"] == case["id"]

    assert case["status"] == "submitted"
    assert case["case_type"] == "fraud"
    assert case["victim"] == {"name": "Asha Verma", "phone": "9876500000", "email": "asha.verma@legalcase.io"}
    assert case["accused"]["name"] == "Vikram Malhotra"
    assert case["city"] == "delhi"
    assert case["police_station_id"] == station_ids["DEL-001"]
    assert case["lawyer_id"] == lawyer_user["user"]["id"]
    assert case["client_id"] == client_user["user"]["id"]

    notes = client.get("/api/notifications", headers=client_user["headers"]).json()
    assert {"case_request_update", "case_created"} <= {n["type"] for n in notes}


def test_accept_without_auto_create(client, case_request, lawyer_user):
    resp = client.patch(
        f"/api/case-requests/{case_request['id']}",
        json={"status": "accepted", "auto_create": False},
        headers=lawyer_user["headers"],
    )
    assert resp.json()["case"] is None
    assert resp.json()["case_request"]["status"] == "accepted"


def test_accept_with_overrides(client, case_request, lawyer_user, station_ids):
    resp = client.patch(
        f"/api/case-requests/{case_request['id']}",
        json={
            "status": "accepted",
            "overrides": {"title": "Forged cheques", "police_station_id": station_ids["MUM-001"], "city": "mumbai"},
        },
        headers=lawyer_user["headers"],
    )
    case = resp.json()["case"]
    assert case["title"] == "Forged cheques"
    assert case["city"] == "mumbai"
    assert case["police_station_id"] == station_ids["MUM-001"]


def test_bad_override_station_leaves_request_pending(client, case_request, lawyer_user, storage):
    resp = client.patch(
        f"/api/case-requests/{case_request['id']}",
        json={"status": "accepted", "overrides": {"police_station_id": "missing"}},
        headers=lawyer_user["headers"],
    )
    assert resp.status_code == 400
    assert storage.get_case_request(case_request["id"]).status == "pending"


def test_reject_request(client, case_request, lawyer_user, client_user, storage):
    resp = client.patch(
        f"/api/case-requests/{case_request['id']}",
        json={"status": "rejected", "lawyer_response": "Outside my practice"},
        headers=lawyer_user["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["case"] is None
    assert resp.json()["case_request"]["status"] == "rejected"
    assert storage.list_cases(client_id=client_user["user"]["id"]) == []

    notes = client.get("/api/notifications", headers=client_user["headers"]).json()
    assert any("Outside my practice" in n["message"] for n in notes)


def test_respond_twice_conflicts(client, case_request, lawyer_user):
    url = f"/api/case-requests/{case_request['id']}"
    client.patch(url, json={"status": "rejected"}, headers=lawyer_user["headers"])
    resp = client.patch(url, json={"status": "accepted"}, headers=lawyer_user["headers"])
    assert resp.status_code == 409


def test_client_cannot_respond(client, case_request, client_user):
    resp = client.patch(
        f"/api/case-requests/{case_request['id']}",
        json={"status": "accepted"},
        headers=client_user["headers"],
    )
    assert resp.status_code == 403


def test_other_lawyer_cannot_respond(client, case_request, other_lawyer):
    resp = client.patch(
        f"/api/case-requests/{case_request['id']}",
        json={"status": "accepted"},
        headers=other_lawyer["headers"],
    )
    assert resp.status_code == 403


# =============================================================================
# Explicit case creation
# =============================================================================


def test_create_case_endpoint_accepts_pending_request(client, case_request, lawyer_user):
    url = f"/api/case-requests/{case_request['id']}/create-case"
    resp = client.post(url, json={"accused_phone": "9811100000"}, headers=lawyer_user["headers"])
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["case_request"]["status"] == "accepted"
    assert body["case"]["accused"]["phone"] == "9811100000"

    again = client.post(url, headers=lawyer_user["headers"])
    assert again.status_code == 409


def test_create_case_from_rejected_request(client, case_request, lawyer_user):
    client.patch(f"/api/case-requests/{case_request['id']}", json={"status": "rejected"}, headers=lawyer_user["headers"])
    resp = client.post(f"/api/case-requests/{case_request['id']}/create-case", headers=lawyer_user["headers"])
    assert resp.status_code == 409


def test_client_deletes_request(client, case_request, client_user, storage):
    resp = client.delete(f"/api/case-requests/{case_request['id']}", headers=client_user["headers"])
    assert resp.status_code == 200
    assert storage.get_case_request(case_request["id"]) is None
