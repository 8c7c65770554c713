"""Welcome and health endpoints."""


def test_welcome_lists_endpoints(client):
    response = client.get("/api/")

    assert response.status_code == 200
    body = response.json()
    assert body["version"] == "1.0.0"
    assert body["endpoints"]["orders"] == "/api/orders"


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok", "domain": "marketplace", "version": "1.0.0"}


def test_unknown_token_is_rejected(client):
    response = client.get("/api/users/profile", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
