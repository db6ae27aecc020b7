"""
Integration tests for complete chat turns through the graph.
"""

import pytest

from clinic_bot.graph.builder import build_graph
from clinic_bot.models.domain import Intent
from clinic_bot.services.llm_service import LLMService


@pytest.mark.integration
class TestActionTokenFlows:
    """Turns driven by widget action tokens; the model is never needed."""

    @pytest.mark.asyncio
    async def test_init_chat_returns_welcome_card(self, build_orchestrator, failing_model):
        # Arrange
        orchestrator = build_orchestrator(failing_model)

        # Act
        result = await orchestrator.handle_turn("INIT_CHAT", [])

        # Assert
        assert not result.failed
        payload = result.response.to_payload()
        assert payload["type"] == "welcome_card"
        assert [b["payload"] for b in payload["buttons"]] == [
            "ACTION_NAVIGATE_BOOKING",
            "Who is the doctor?",
            "What treatments do you do?",
            "I have an emergency",
        ]
        failing_model.ainvoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_booking_submission_confirms_fields(
        self, build_orchestrator, failing_model
    ):
        orchestrator = build_orchestrator(failing_model)

        result = await orchestrator.handle_turn(
            "ACTION_SUBMIT_BOOKING_NAME_Jane_Doe_PHONE_9999999999", ["Bot: form"]
        )

        assert result.response.type == "text"
        assert "Jane Doe" in result.response.text
        assert "9999999999" in result.response.text

    @pytest.mark.asyncio
    async def test_malformed_submission_still_confirms(
        self, build_orchestrator, failing_model
    ):
        orchestrator = build_orchestrator(failing_model)

        result = await orchestrator.handle_turn("ACTION_SUBMIT_BOOKING_oops", [])

        assert not result.failed
        assert result.response.text == "Thank you! We have received your request."

    @pytest.mark.asyncio
    async def test_unknown_doctor_details_show_default(
        self, build_orchestrator, failing_model
    ):
        orchestrator = build_orchestrator(failing_model)

        unknown = await orchestrator.handle_turn("ACTION_DETAILS_dr_nobody", [])
        default = await orchestrator.handle_turn("ACTION_DETAILS_dr_pranjal", [])

        assert unknown.response == default.response
        assert unknown.response.text.startswith("Dr. Pranjal\nGeneral Dentist")

    @pytest.mark.asyncio
    async def test_navigate_booking_returns_form(self, build_orchestrator, failing_model):
        orchestrator = build_orchestrator(failing_model)

        result = await orchestrator.handle_turn("ACTION_NAVIGATE_BOOKING", [])

        assert result.response.to_payload() == {
            "type": "booking_form",
            "text": "To book your appointment with Dr. Pranjal, please enter your details below:",
        }


@pytest.mark.integration
class TestModelFlows:
    """Free-text turns classified and answered by the model."""

    @pytest.mark.asyncio
    async def test_wrong_case_label_routes_to_doctor_card(
        self, build_orchestrator, stub_model
    ):
        orchestrator = build_orchestrator(stub_model("FIND_DOCTOR"))

        result = await orchestrator.handle_turn("Who can fix my teeth?", [])

        assert result.response.type == "card"
        assert "Dr. Pranjal" in result.response.text
        assert result.response.buttons[0].payload == "ACTION_DETAILS_dr_pranjal"

    @pytest.mark.asyncio
    async def test_emergency_label_returns_urgent_text(self, build_orchestrator, stub_model):
        orchestrator = build_orchestrator(stub_model("emergency"))

        result = await orchestrator.handle_turn("My tooth broke and is bleeding", [])

        assert result.response.type == "text"
        assert result.response.buttons[0].payload == "tel:08048903967"

    @pytest.mark.asyncio
    async def test_general_chat_strips_bold_markup(self, build_orchestrator, stub_model):
        # Arrange
        model = stub_model(
            "general_chat",
            "I understand. **Root canals** are painless here. Shall we book a visit?",
        )
        orchestrator = build_orchestrator(model)
        history = [f"line {i}" for i in range(8)]

        # Act
        result = await orchestrator.handle_turn("Do root canals hurt?", history)

        # Assert
        assert result.response.to_payload() == {
            "type": "text",
            "text": "I understand. Root canals are painless here. Shall we book a visit?",
        }
        answer_prompt = model.ainvoke.await_args_list[1].args[0]
        assert "line 0" in answer_prompt  # full history, not the window
        assert 'User: "Do root canals hurt?"' in answer_prompt
        assert "Do NOT use markdown bold syntax" in answer_prompt

    @pytest.mark.asyncio
    async def test_model_unavailable_returns_apology(
        self, build_orchestrator, failing_model, apology
    ):
        """Classifier degrades to general chat, whose failure reaches the top level."""
        orchestrator = build_orchestrator(failing_model)

        result = await orchestrator.handle_turn("I have severe tooth pain", [])

        assert result.failed
        assert result.response.to_payload() == {"type": "text", "text": apology}
        assert failing_model.ainvoke.await_count == 2

    @pytest.mark.asyncio
    async def test_identical_turns_give_identical_responses(
        self, build_orchestrator, stub_model
    ):
        orchestrator = build_orchestrator(
            stub_model("general_chat", "Same answer.", "general_chat", "Same answer.")
        )

        first = await orchestrator.handle_turn("Where are you located?", ["Bot: hi"])
        second = await orchestrator.handle_turn("Where are you located?", ["Bot: hi"])

        assert first.response.model_dump_json() == second.response.model_dump_json()


@pytest.mark.integration
class TestAgentState:
    """Checks the state written by the graph nodes."""

    @pytest.mark.asyncio
    async def test_find_doctor_records_selected_doctor(
        self, settings, registry, stub_model
    ):
        graph = build_graph(
            LLMService(stub_model("find_doctor")), registry=registry, settings=settings
        )

        result = await graph.ainvoke(
            {"user_message": "Which dentist is available?", "chat_history": []}
        )

        assert result["intent"] == Intent.FIND_DOCTOR
        assert result["selected_doctor_id"] == "dr_pranjal"
        assert result["doctor_data"] == registry.default
        assert result["final_response"].type == "card"

    @pytest.mark.asyncio
    async def test_free_text_has_no_action(self, settings, stub_model):
        graph = build_graph(LLMService(stub_model("services_list")), settings=settings)

        result = await graph.ainvoke({"user_message": "What do you offer?", "chat_history": []})

        assert result["action"] is None
        assert result["final_response"].type == "text"
