# tests/test_main.py
from fastapi.testclient import TestClient
from constructiq.main import app

def test_root():
    with TestClient(app) as client:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "ConstructIQ API is running"}

def test_user_header_is_required():
    with TestClient(app) as client:
        response = client.get("/api/projects")
        assert response.status_code == 422
