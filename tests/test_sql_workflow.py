"""The main API workflows, run against SqlStorage on SQLite."""

import re

import pytest

from app.db.seed import seed_storage


@pytest.fixture
def storage(sql_storage):
    seed_storage(sql_storage)
    return sql_storage


def _send_request(client, sender, lawyer, title):
    resp = client.post(
        "/api/case-requests",
        json={
            "lawyer_id": lawyer["user"]["id"],
            "title": title,
            "description": "Cheques drawn on my account without consent",
            "victim_name": "Asha Verma",
            "accused_name": "Vikram Malhotra",
            "client_phone": "9876500000",
        },
        headers=sender["headers"],
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_request_to_approved_case(client, client_user, lawyer_user, police_user, station_ids):
    request = _send_request(client, client_user, lawyer_user, "Cheque fraud")

    resp = client.patch(
        f"/api/case-requests/{request['id']}",
        json={"status": "accepted"},
        headers=lawyer_user["headers"],
    )
    assert resp.status_code == 200, resp.text
    case = resp.json()["case"]
    assert case["case_type"] == "civil"
    assert case["victim"]["email"] == "asha.verma@legalcase.io"
    assert case["police_station_id"] == station_ids["DEL-001"]

    approved = client.patch(f"/api/cases/{case['id']}/approve", headers=police_user["headers"]).json()
    assert re.match(r"^PNR-\d{4}-[A-Z0-9]{6}$", approved["pnr"])
    assert approved["hearing_date"]


def test_case_with_documents(client, filed_case, client_user, lawyer_user, upload_dir):
    resp = client.post(
        "/api/documents/upload",
        data={"case_id": filed_case["id"]},
        files={"document": ("brief.docx", b"PK brief", "application/octet-stream")},
        headers=lawyer_user["headers"],
    )
    assert resp.status_code == 201, resp.text
    doc = resp.json()

    case = client.get(f"/api/cases/{filed_case['id']}", headers=client_user["headers"]).json()
    assert case["documents"] == [doc["filename"]]

    assert client.delete(f"/api/cases/{filed_case['id']}", headers=client_user["headers"]).status_code == 200
    assert not (upload_dir / "documents" / doc["filename"]).exists()


def test_deleted_request_leaves_notification(client, client_user, lawyer_user):
    _send_request(client, client_user, lawyer_user, "First")
    second = _send_request(client, client_user, lawyer_user, "Second")

    titles = [r["title"] for r in client.get("/api/case-requests", headers=lawyer_user["headers"]).json()]
    assert sorted(titles) == ["First", "Second"]

    assert client.delete(f"/api/case-requests/{second['id']}", headers=client_user["headers"]).status_code == 200
    notes = client.get("/api/notifications", headers=lawyer_user["headers"]).json()
    assert len(notes) == 2
    assert second["id"] not in {n["case_request_id"] for n in notes}


def test_profile_null_phone_is_rejected(client, client_user):
    resp = client.patch("/api/users/me", json={"phone": None}, headers=client_user["headers"])
    assert resp.status_code == 422
