"""
Integration tests for the HTTP chat endpoint.
"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from clinic_bot.api.app import create_app


@pytest.fixture
def client_for(build_orchestrator, settings):
    """Builds a TestClient around an orchestrator using ``model``."""

    def _client(model) -> TestClient:
        app = create_app(orchestrator=build_orchestrator(model), settings=settings)
        return TestClient(app)

    return _client


@pytest.mark.integration
class TestChatEndpoint:
    def test_init_chat_returns_welcome_card(self, client_for, failing_model):
        with client_for(failing_model) as client:
            response = client.post("/api/chat", json={"message": "INIT_CHAT", "history": []})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["type"] == "welcome_card"
        assert len(data["buttons"]) == 4

    @pytest.mark.parametrize("body", [{"message": "INIT_CHAT"}, {"message": "INIT_CHAT", "history": None}])
    def test_history_is_optional(self, client_for, failing_model, body):
        with client_for(failing_model) as client:
            response = client.post("/api/chat", json=body)

        assert response.status_code == status.HTTP_200_OK

    def test_card_serialization_includes_image(self, client_for, stub_model):
        with client_for(stub_model("find_doctor")) as client:
            response = client.post("/api/chat", json={"message": "Who is the doctor?"})

        data = response.json()
        assert data["type"] == "card"
        assert data["image"] == "/drpic.jpg"
        assert set(data) == {"type", "text", "image", "buttons"}

    def test_model_failure_returns_500_with_apology(
        self, client_for, failing_model, apology
    ):
        with client_for(failing_model) as client:
            response = client.post(
                "/api/chat", json={"message": "I have severe tooth pain", "history": []}
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"type": "text", "text": apology}

    def test_missing_message_is_rejected(self, client_for, failing_model):
        with client_for(failing_model) as client:
            response = client.post("/api/chat", json={"history": []})

        assert response.status_code == 422

    def test_request_id_is_echoed(self, client_for, failing_model):
        with client_for(failing_model) as client:
            response = client.post(
                "/api/chat",
                json={"message": "INIT_CHAT"},
                headers={"X-Request-ID": "req-123"},
            )

        assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.integration
def test_health(client_for, failing_model):
    with client_for(failing_model) as client:
        response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"
