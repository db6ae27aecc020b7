"""
Shared test fixtures and configuration.
"""

import pytest
from unittest.mock import Mock, AsyncMock
from langchain_core.messages import AIMessage

from clinic_bot import config
from clinic_bot.database.doctors import DoctorRegistry
from clinic_bot.orchestrator import ChatOrchestrator
from clinic_bot.services.llm_service import LLMService

APOLOGY = (
    "I'm having trouble connecting to the server. "
    "Please call us directly at 080-48903967 for assistance."
)


def make_model(*replies):
    """
    Chat model stub whose ``ainvoke`` returns ``replies`` in order.
    Exceptions in ``replies`` are raised instead of returned.
    """
    model = Mock()
    model.ainvoke = AsyncMock(
        side_effect=[
            reply if isinstance(reply, BaseException) else AIMessage(content=reply)
            for reply in replies
        ]
    )
    return model


def make_failing_model(error: Exception | None = None):
    """Chat model stub that always fails, as when the provider is unreachable."""
    model = Mock()
    model.ainvoke = AsyncMock(side_effect=error or ConnectionError("model unavailable"))
    return model


@pytest.fixture
def settings() -> config.Settings:
    """Settings isolated from the developer's .env file."""
    return config.Settings(_env_file=None, google_api_key="test-key")


@pytest.fixture
def registry() -> DoctorRegistry:
    return DoctorRegistry()


@pytest.fixture
def failing_model():
    return make_failing_model()


@pytest.fixture
def failing_llm_service(failing_model) -> LLMService:
    return LLMService(failing_model)


@pytest.fixture
def build_orchestrator(settings):
    """Factory building an orchestrator around a stub model."""

    def _build(model) -> ChatOrchestrator:
        return ChatOrchestrator.from_settings(model=model, settings=settings)

    return _build


@pytest.fixture
def stub_model():
    """Factory for chat model stubs: ``stub_model("find_doctor", "answer")``."""
    return make_model


@pytest.fixture
def apology() -> str:
    """Fixed text returned when a turn fails."""
    return APOLOGY
