# tests/test_main_app.py
from fastapi.testclient import TestClient
from app.utils.logger import logger


def test_read_root(client: TestClient):
    """Test if the root endpoint returns the welcome message."""
    logger.info("Testing root endpoint...")
    response = client.get("/")
    assert response.status_code == 200
    json_response = response.json()
    assert "message" in json_response
    assert "Welcome to the Coding Mentor API" in json_response["message"]
    logger.info("Root endpoint test passed.")


def test_unknown_route_uses_message_body(client: TestClient):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
