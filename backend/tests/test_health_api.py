def test_health_endpoint(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "service": "healthvault-api",
    }


def test_root_endpoint(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {
        "message": "Welcome to HealthVault API",
        "docs": "/docs",
        "health": "/health",
    }


def test_assistant_health_reports_strategy(client):
    response = client.get("/health/assistant")

    assert response.status_code == 200
    assert response.json() == {"strategy": "template", "model": None}
