from datetime import datetime

from meridian.app.domain.models import Project


def _names(response):
    return {item["name"] for item in response.json()}


def test_anonymous_list_shows_only_public_published(client, seed):
    seed(name="A", private=False, published=True)
    seed(name="B", private=True, published=True)
    seed(name="C", private=False, published=False)

    response = client.get("/projects")
    assert response.status_code == 200
    body = response.json()
    assert [item["name"] for item in body] == ["A"]
    assert "private" not in body[0]
    assert "published" not in body[0]


def test_reader_list_shows_published_with_private_flag(client, seed, headers):
    seed(name="A", private=False, published=True)
    seed(name="B", private=True, published=True)
    seed(name="C", private=True, published=False)

    response = client.get("/projects", headers=headers("reader", roles=()))
    assert _names(response) == {"A", "B"}
    for item in response.json():
        assert "private" in item
        assert "published" not in item


def test_editor_list_shows_everything_with_flags(client, seed, headers):
    seed(name="A", private=False, published=True)
    seed(name="B", private=True, published=False)

    response = client.get("/projects", headers=headers())
    assert _names(response) == {"A", "B"}
    flags = {item["name"]: (item["private"], item["published"]) for item in response.json()}
    assert flags == {"A": (False, True), "B": (True, False)}


def test_list_projects_category_and_location(client, seed):
    seed(
        name="mapped",
        published=True,
        data={"name": "mapped", "category": ["health"], "location": {"lat": 1.5}},
    )
    item = client.get("/projects").json()[0]
    assert item["categories"] == ["health"]
    assert item["location"] == {"lat": 1.5}
    assert "data" not in item
    assert "owner" not in item


def test_invalid_token_on_list_is_treated_as_anonymous(client, seed):
    seed(name="A", published=True)
    seed(name="B", private=True, published=True)
    response = client.get("/projects", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 200
    assert _names(response) == {"A"}


def test_editor_create_sets_owner_and_default_flags(client, headers, fetch):
    response = client.post(
        "/projects",
        json={"name": "C", "data": {"budget": 10}},
        headers=headers("editor-7"),
    )
    assert response.status_code == 200
    record_id = response.json()["id"]

    stored = fetch(Project, record_id)
    assert stored.owner == "editor-7"
    assert stored.name == "C"
    assert stored.private is False
    assert stored.published is False
    assert stored.data == {"name": "C", "data": {"budget": 10}}
    assert stored.created_at == stored.updated_at


def test_create_honours_flags(client, headers, fetch):
    record_id = client.post(
        "/projects",
        json={"name": "D", "private": True, "published": True},
        headers=headers(),
    ).json()["id"]
    stored = fetch(Project, record_id)
    assert (stored.private, stored.published) == (True, True)


def test_create_bad_data_regardless_of_role(client, headers):
    for who in (headers(), headers("reader", roles=())):
        assert client.post("/projects", json={"name": ""}, headers=who).status_code == 422
        assert client.post("/projects", json={}, headers=who).status_code == 422
        assert client.post("/projects", headers=who).status_code == 422


def test_create_requires_edit_role(client, headers):
    response = client.post("/projects", json={"name": "x"}, headers=headers("reader", roles=()))
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authorized to perform this action"


def test_create_requires_token(client):
    response = client.post("/projects", json={"name": "x"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing bearer token"

    response = client.post(
        "/projects", json={"name": "x"}, headers={"Authorization": "Bearer nonsense"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_read_public_published_anonymously(client, seed):
    record_id = seed(name="A", private=False, published=True, owner="o-1")
    response = client.get(f"/projects/{record_id}")
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == record_id
    assert body["owner"] == "o-1"
    assert "private" not in body
    assert "published" not in body


def test_read_private_published_needs_authentication(client, seed, headers):
    record_id = seed(name="B", private=True, published=True)
    assert client.get(f"/projects/{record_id}").status_code == 401
    response = client.get(f"/projects/{record_id}", headers=headers("reader", roles=()))
    assert response.status_code == 200
    assert "private" not in response.json()


def test_unpublished_hidden_from_non_editors(client, seed, headers):
    for private in (False, True):
        record_id = seed(name="hidden", private=private, published=False)
        assert client.get(f"/projects/{record_id}").status_code == 401
        reader = headers("reader", roles=())
        assert client.get(f"/projects/{record_id}", headers=reader).status_code == 401

        response = client.get(f"/projects/{record_id}", headers=headers())
        assert response.status_code == 200
        assert response.json()["private"] is private
        assert response.json()["published"] is False


def test_read_missing_record_is_404(client):
    response = client.get("/projects/does-not-exist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Record not found"


def test_update_replaces_fields_and_keeps_owner(client, seed, headers, fetch):
    created = datetime(2020, 1, 1)
    record_id = seed(
        name="old",
        private=True,
        published=True,
        owner="original-owner",
        data={"name": "old", "category": ["x"]},
        created_at=created,
    )

    response = client.put(
        f"/projects/{record_id}",
        json={"name": "new", "location": "here"},
        headers=headers("another-editor"),
    )
    assert response.status_code == 200
    assert response.json() == {"id": record_id}

    stored = fetch(Project, record_id)
    assert stored.name == "new"
    assert stored.private is False
    assert stored.published is False
    assert stored.data == {"name": "new", "location": "here"}
    assert stored.owner == "original-owner"
    assert stored.created_at == created
    assert stored.updated_at > created


def test_update_rejected_for_non_editor_even_owner(client, seed, headers):
    record_id = seed(name="mine", owner="reader")
    response = client.put(
        f"/projects/{record_id}",
        json={"name": "changed"},
        headers=headers("reader", roles=()),
    )
    assert response.status_code == 401


def test_update_missing_record_is_404(client, headers):
    response = client.put("/projects/nope", json={"name": "x"}, headers=headers())
    assert response.status_code == 404


def test_delete_removes_record(client, seed, headers, fetch):
    record_id = seed(name="doomed")
    response = client.delete(f"/projects/{record_id}", headers=headers())
    assert response.status_code == 200
    assert response.json() == {"id": record_id}
    assert fetch(Project, record_id) is None


def test_delete_missing_record_echoes_id(client, headers):
    response = client.delete("/projects/ghost", headers=headers())
    assert response.status_code == 200
    assert response.json() == {"id": "ghost"}


def test_delete_rejected_for_non_editor(client, seed, headers, fetch):
    record_id = seed(name="kept", owner="reader")
    assert client.delete(f"/projects/{record_id}").status_code == 401
    response = client.delete(f"/projects/{record_id}", headers=headers("reader", roles=()))
    assert response.status_code == 401
    assert fetch(Project, record_id) is not None
