"""Document upload, listing, serving and deletion."""

import pytest

from app.core.config import settings


def _upload(client, user, case_id, name="statement.pdf", data=b"%PDF-1.4 statement", content_type="application/pdf"):
    return client.post(
        "/api/documents/upload",
        data={"case_id": case_id},
        files={"document": (name, data, content_type)},
        headers=user["headers"],
    )


def test_lawyer_upload_notifies_client(client, filed_case, lawyer_user, client_user, mailer, upload_dir):
    resp = _upload(client, lawyer_user, filed_case["id"])
    assert resp.status_code == 201, resp.text
    doc = resp.json()
    assert doc["original_name"] == "statement.pdf"
    assert doc["uploaded_by"] == "Sarah Johnson"
    assert doc["case_title"] == "Stolen laptop"
    assert doc["path"] == f"/uploads/documents/{doc['filename']}"
    assert (upload_dir / "documents" / doc["filename"]).exists()

    case = client.get(f"/api/cases/{filed_case['id']}", headers=client_user["headers"]).json()
    assert doc["filename"] in case["documents"]

    notes = client.get("/api/notifications", headers=client_user["headers"]).json()
    assert any(n["type"] == "document" and "statement.pdf" in n["message"] for n in notes)
    assert mailer.subjects_for(client_user["user"]["email"]) == ["New Document: statement.pdf"]


def test_upload_to_someone_elses_case(client, filed_case, other_client):
    assert _upload(client, other_client, filed_case["id"]).status_code == 403


@pytest.mark.parametrize(
    "name,data,status",
    [
        ("empty.pdf", b"", 400),
        ("script.sh", b"#!/bin/sh", 400),
    ],
)
def test_rejected_uploads(client, filed_case, client_user, name, data, status):
    assert _upload(client, client_user, filed_case["id"], name=name, data=data).status_code == status


def test_oversized_upload(client, filed_case, client_user, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_BYTES", 10)
    resp = _upload(client, client_user, filed_case["id"], data=b"x" * 11)
    assert resp.status_code == 413


def test_bulk_upload_to_case(client, filed_case, client_user):
    resp = client.post(
        "/api/cases/documents",
        data={"case_id": filed_case["id"]},
        files=[
            ("documents", ("a.jpg", b"\xff\xd8a", "image/jpeg")),
            ("documents", ("b.docx", b"PKb", "application/vnd.openxmlformats-officedocument.wordprocessingml.document")),
        ],
        headers=client_user["headers"],
    )
    assert resp.status_code == 200, resp.text
    assert len(resp.json()["documents"]) == 2


def test_too_many_files(client, filed_case, client_user, monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILES_PER_REQUEST", 1)
    resp = client.post(
        "/api/cases/documents",
        data={"case_id": filed_case["id"]},
        files=[
            ("documents", ("a.pdf", b"a", "application/pdf")),
            ("documents", ("b.pdf", b"b", "application/pdf")),
        ],
        headers=client_user["headers"],
    )
    assert resp.status_code == 400


def test_list_documents_is_scoped(client, register, filed_case, client_user, other_client, police_user):
    _upload(client, client_user, filed_case["id"])
    # officers are not limited to their own station here
    mumbai_officer = register("police", "inspector.patil@legalcase.io", city="mumbai")

    assert len(client.get("/api/documents", headers=client_user["headers"]).json()) == 1
    assert len(client.get("/api/documents", headers=police_user["headers"]).json()) == 1
    assert len(client.get("/api/documents", headers=mumbai_officer["headers"]).json()) == 1
    assert client.get("/api/documents", headers=other_client["headers"]).json() == []


def test_download_and_view(client, filed_case, client_user, other_client):
    doc = _upload(client, client_user, filed_case["id"]).json()

    download = client.get(f"/api/documents/download/{doc['filename']}", headers=client_user["headers"])
    assert download.status_code == 200
    assert download.content == b"%PDF-1.4 statement"
    assert download.headers["content-disposition"].startswith("attachment")

    view = client.get(f"/api/documents/view/{doc['filename']}", headers=client_user["headers"])
    assert view.status_code == 200
    assert view.headers["content-disposition"].startswith("inline")

    denied = client.get(f"/api/documents/view/{doc['filename']}", headers=other_client["headers"])
    assert denied.status_code == 403


def test_download_unknown_file(client, client_user):
    assert client.get("/api/documents/download/nope.pdf", headers=client_user["headers"]).status_code == 404


def test_delete_document(client, filed_case, client_user, lawyer_user, police_user, upload_dir):
    doc = _upload(client, client_user, filed_case["id"]).json()

    assert client.delete(f"/api/documents/{doc['id']}", headers=police_user["headers"]).status_code == 403

    # the case's lawyer may remove what the client uploaded
    resp = client.delete(f"/api/documents/{doc['id']}", headers=lawyer_user["headers"])
    assert resp.status_code == 200
    assert not (upload_dir / "documents" / doc["filename"]).exists()

    case = client.get(f"/api/cases/{filed_case['id']}", headers=client_user["headers"]).json()
    assert doc["filename"] not in case["documents"]


def test_failed_record_leaves_no_file(client, filed_case, client_user, storage, upload_dir, monkeypatch):
    def broken(data):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(storage, "create_document", broken)
    with pytest.raises(RuntimeError):
        _upload(client, client_user, filed_case["id"])

    assert list((upload_dir / "documents").iterdir()) == []
