# tests/api/test_reviews_api.py
import uuid


def test_submit_review_create_then_update(client, customer, provider, auth_headers, queued_notifications):
    headers = auth_headers(customer)
    payload = {"reviewee_id": str(provider.user.id), "rating": 5}

    created = client.post("/api/v1/reviews", json=payload, headers=headers)
    updated = client.post(
        "/api/v1/reviews", json={**payload, "rating": 3, "comment": "revised"}, headers=headers
    )

    assert created.status_code == 201
    assert created.json()["is_update"] is False
    assert updated.status_code == 200
    assert updated.json()["is_update"] is True
    assert updated.json()["review"]["id"] == created.json()["review"]["id"]
    assert updated.json()["review"]["comment"] == "revised"
    queued_notifications.assert_called_once()


def test_submit_review_requires_auth(client, provider):
    response = client.post(
        "/api/v1/reviews", json={"reviewee_id": str(provider.user.id), "rating": 5}
    )
    assert response.status_code == 401


def test_submit_review_bad_rating(client, customer, provider, auth_headers):
    response = client.post(
        "/api/v1/reviews",
        json={"reviewee_id": str(provider.user.id), "rating": 6},
        headers=auth_headers(customer),
    )
    assert response.status_code == 400


def test_self_review_is_bad_request(client, customer, auth_headers):
    response = client.post(
        "/api/v1/reviews",
        json={"reviewee_id": str(customer.user.id), "rating": 5},
        headers=auth_headers(customer),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_unknown_reviewee_is_not_found(client, customer, auth_headers):
    response = client.post(
        "/api/v1/reviews",
        json={"reviewee_id": str(uuid.uuid4()), "rating": 5},
        headers=auth_headers(customer),
    )
    assert response.status_code == 404


def test_stats_and_pages(client, customer, other_customer, provider, auth_headers):
    for reviewer, rating in ((customer, 3), (other_customer, 4)):
        client.post(
            "/api/v1/reviews",
            json={"reviewee_id": str(provider.user.id), "rating": rating},
            headers=auth_headers(reviewer),
        )

    stats = client.get(f"/api/v1/reviews/stats/{provider.user.id}").json()
    received = client.get(
        f"/api/v1/reviews/received/{provider.user.id}", params={"page": 1, "limit": 1}
    ).json()
    given = client.get(f"/api/v1/reviews/given/{customer.user.id}").json()

    assert stats["count"] == 2
    assert stats["average"] == 3.5
    assert stats["distribution"]["3"] == 1
    assert received["pagination"] == {"page": 1, "limit": 1, "total": 2, "total_pages": 2}
    assert len(received["items"]) == 1
    assert given["pagination"]["total"] == 1
    assert client.get(
        f"/api/v1/reviews/received/{provider.user.id}", params={"page": 0}
    ).status_code == 400


def test_delete_review_only_by_author(client, customer, other_customer, provider, auth_headers):
    review = client.post(
        "/api/v1/reviews",
        json={"reviewee_id": str(provider.user.id), "rating": 5},
        headers=auth_headers(customer),
    ).json()["review"]

    forbidden = client.delete(f"/api/v1/reviews/{review['id']}", headers=auth_headers(other_customer))
    deleted = client.delete(f"/api/v1/reviews/{review['id']}", headers=auth_headers(customer))
    missing = client.get(f"/api/v1/reviews/{review['id']}")

    assert forbidden.status_code == 403
    assert deleted.status_code == 200
    assert missing.status_code == 404


def test_notifications_inbox(client, db_session, customer, provider, auth_headers):
    from app.services.notification_service import NotificationService

    NotificationService(db_session).notify_review_created(
        customer.user.id, provider.user.id, 5, "Carol Plumber"
    )

    inbox = client.get("/api/v1/notifications", headers=auth_headers(provider)).json()
    assert [n["kind"] for n in inbox] == ["review_received"]

    response = client.post(
        f"/api/v1/notifications/{inbox[0]['id']}/read", headers=auth_headers(provider)
    )
    assert response.status_code == 200
    assert response.json()["is_read"] is True

    response = client.post(
        f"/api/v1/notifications/{inbox[0]['id']}/read", headers=auth_headers(customer)
    )
    assert response.status_code == 403
