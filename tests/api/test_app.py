# tests/api/test_app.py
import yaml


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


def test_openapi_yaml(client):
    response = client.get("/openapi.yaml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/x-yaml")
    schema = yaml.safe_load(response.text)
    assert "/api/v1/categories" in schema["paths"]
    assert "/api/v1/services/{service_id}/reviews" in schema["paths"]


def test_unknown_route(client):
    assert client.get("/api/v1/nothing").status_code == 404
