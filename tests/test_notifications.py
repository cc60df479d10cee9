"""In-app notifications."""


def _create(client, user, title="Reminder", **extra):
    return client.post(
        "/api/notifications",
        json={"title": title, "message": "Bring your ID to the station", **extra},
        headers=user["headers"],
    )


def test_create_defaults_to_self(client, client_user):
    resp = _create(client, client_user)
    assert resp.status_code == 201
    body = resp.json()
    assert body["user_id"] == client_user["user"]["id"]
    assert body["type"] == "info"
    assert body["read"] is False


def test_create_for_unknown_user(client, client_user):
    assert _create(client, client_user, user_id="ghost").status_code == 404


def test_list_is_newest_first_and_private(client, client_user, other_client):
    _create(client, client_user, title="first")
    _create(client, client_user, title="second")
    _create(client, other_client, title="not mine")

    titles = [n["title"] for n in client.get("/api/notifications", headers=client_user["headers"]).json()]
    assert sorted(titles) == ["first", "second"]


def test_mark_read_only_own(client, client_user, other_client):
    note = _create(client, client_user).json()

    assert client.patch(f"/api/notifications/{note['id']}/read", headers=other_client["headers"]).status_code == 404

    resp = client.patch(f"/api/notifications/{note['id']}/read", headers=client_user["headers"])
    assert resp.status_code == 200
    assert resp.json()["read"] is True


def test_mark_all_read_and_delete_read(client, client_user):
    _create(client, client_user, title="a")
    _create(client, client_user, title="b")

    resp = client.patch("/api/notifications/mark-all-read", headers=client_user["headers"])
    assert resp.status_code == 200
    assert resp.json()["message"].startswith("2 ")

    resp = client.delete("/api/notifications/read", headers=client_user["headers"])
    assert resp.status_code == 200
    assert client.get("/api/notifications", headers=client_user["headers"]).json() == []


def test_delete_notification(client, client_user, other_client):
    note = _create(client, client_user).json()
    assert client.delete(f"/api/notifications/{note['id']}", headers=other_client["headers"]).status_code == 404
    assert client.delete(f"/api/notifications/{note['id']}", headers=client_user["headers"]).status_code == 200
    assert client.delete(f"/api/notifications/{note['id']}", headers=client_user["headers"]).status_code == 404
