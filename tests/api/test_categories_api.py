# tests/api/test_categories_api.py
import uuid


def _create(client, headers, slug, parent_id=None, **fields):
    payload = {"slug": slug, **fields}
    if parent_id:
        payload["parent_id"] = parent_id
    return client.post("/api/v1/categories", json=payload, headers=headers)


def test_create_and_get_category(client, admin, auth_headers):
    headers = auth_headers(admin)

    response = _create(client, headers, "home-services", name="Home Services")
    assert response.status_code == 201
    category = response.json()
    assert category["slug"] == "home-services"

    response = client.get(f"/api/v1/categories/{category['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Home Services"

    response = client.get("/api/v1/categories/slug/home-services")
    assert response.status_code == 200
    assert response.json()["id"] == category["id"]


def test_create_requires_admin(client, customer, auth_headers):
    assert client.post("/api/v1/categories", json={"slug": "plumbing"}).status_code == 401

    response = client.post(
        "/api/v1/categories", json={"slug": "plumbing"}, headers=auth_headers(customer)
    )
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


def test_invalid_api_key(client):
    response = client.post(
        "/api/v1/categories",
        json={"slug": "plumbing"},
        headers={"Authorization": "Bearer mkt_unknown"},
    )
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_invalid_slug_is_bad_request(client, admin, auth_headers):
    response = _create(client, auth_headers(admin), "Not A Slug")

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["errors"]


def test_duplicate_slug_is_conflict(client, admin, auth_headers):
    headers = auth_headers(admin)
    _create(client, headers, "plumbing")

    response = _create(client, headers, "plumbing")

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_missing_category_is_not_found(client):
    assert client.get(f"/api/v1/categories/{uuid.uuid4()}").status_code == 404
    assert client.get("/api/v1/categories/slug/nothing-here").status_code == 404
    assert client.get(f"/api/v1/categories/{uuid.uuid4()}/hierarchy").status_code == 404


def test_cycle_is_bad_request(client, admin, auth_headers):
    headers = auth_headers(admin)
    home = _create(client, headers, "home-services").json()
    plumbing = _create(client, headers, "plumbing", parent_id=home["id"]).json()

    response = client.patch(
        f"/api/v1/categories/{home['id']}", json={"parent_id": plumbing["id"]}, headers=headers
    )

    assert response.status_code == 400
    assert response.json()["code"] == "CIRCULAR_REFERENCE"


def test_list_roots_and_search(client, admin, auth_headers):
    headers = auth_headers(admin)
    home = _create(client, headers, "home-services", name="Home services").json()
    _create(client, headers, "plumbing", parent_id=home["id"], name="Plumbing")

    all_slugs = {c["slug"] for c in client.get("/api/v1/categories").json()}
    root_slugs = [c["slug"] for c in client.get("/api/v1/categories/roots").json()]
    children = client.get("/api/v1/categories", params={"parent_id": home["id"]}).json()
    found = client.get("/api/v1/categories/search", params={"q": "plumb"}).json()

    assert all_slugs == {"home-services", "plumbing"}
    assert root_slugs == ["home-services"]
    assert [c["slug"] for c in children] == ["plumbing"]
    assert [c["slug"] for c in found] == ["plumbing"]
    assert client.get("/api/v1/categories/search", params={"q": "p"}).status_code == 400


def test_delete_with_children_requires_force(client, admin, auth_headers):
    headers = auth_headers(admin)
    home = _create(client, headers, "home-services").json()
    plumbing = _create(client, headers, "plumbing", parent_id=home["id"]).json()

    response = client.delete(f"/api/v1/categories/{home['id']}", headers=headers)
    assert response.status_code == 409

    response = client.delete(
        f"/api/v1/categories/{home['id']}", params={"force": True}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["slug"] == "home-services"

    promoted = client.get(f"/api/v1/categories/{plumbing['id']}").json()
    assert promoted["parent_id"] is None


def test_hierarchy(client, admin, auth_headers):
    headers = auth_headers(admin)
    home = _create(client, headers, "home-services").json()
    plumbing = _create(client, headers, "plumbing", parent_id=home["id"]).json()
    _create(client, headers, "leaks", parent_id=plumbing["id"])

    body = client.get(f"/api/v1/categories/{home['id']}/hierarchy").json()

    assert body["ancestors"] == []
    assert body["category"]["slug"] == "home-services"
    assert body["descendants"][0]["slug"] == "plumbing"
    assert body["descendants"][0]["children"][0]["slug"] == "leaks"
