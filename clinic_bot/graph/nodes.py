"""
Graph nodes implementing the chat turn.
Each node is thin and delegates to a service; handler nodes write
``final_response`` and nothing else reads it inside the graph.
"""

from clinic_bot.database.doctors import DoctorRegistry
from clinic_bot.models.domain import AgentState
from clinic_bot.models.events import SubmitBookingEvent
from clinic_bot.services.chat_service import ChatService
from clinic_bot.services.intent_service import IntentService
from clinic_bot.services.response_service import ResponseService
from clinic_bot.utils.metrics import timed_node
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)


class GraphNodes:
    """
    Container for all graph node functions.
    Nodes are thin wrappers that delegate to services.
    """

    def __init__(
        self,
        intent_service: IntentService,
        response_service: ResponseService,
        chat_service: ChatService,
        registry: DoctorRegistry,
    ):
        """
        Initialize graph nodes with required services.

        Args:
            intent_service: Service classifying the turn
            response_service: Service building fixed responses
            chat_service: Service answering free text with the model
            registry: Doctor profiles
        """
        self.intent_service = intent_service
        self.response_service = response_service
        self.chat_service = chat_service
        self.registry = registry

    @timed_node("classifier")
    async def classifier_node(self, state: AgentState) -> dict:
        """Entry point node that classifies the turn."""
        logger.info("node_started", node="classifier")
        return await self.intent_service.classify_turn(state)

    @timed_node("welcome")
    def welcome_node(self, state: AgentState) -> dict:  # noqa: ARG002
        logger.info("node_started", node="welcome")
        return {"final_response": self.response_service.welcome()}

    @timed_node("find_doctor")
    def doctor_profile_node(self, state: AgentState) -> dict:  # noqa: ARG002
        """Shows the lead doctor and records it as the turn's selected doctor."""
        logger.info("node_started", node="find_doctor")
        doctor = self.registry.default
        return {
            "doctor_data": doctor,
            "selected_doctor_id": doctor.id,
            "final_response": self.response_service.doctor_profile(doctor),
        }

    @timed_node("doctor_details")
    def doctor_details_node(self, state: AgentState) -> dict:
        logger.info(
            "node_started",
            node="doctor_details",
            doctor_id=state.get("selected_doctor_id"),
        )
        return {
            "final_response": self.response_service.doctor_details(
                state.get("selected_doctor_id")
            )
        }

    @timed_node("booking_form")
    def booking_form_node(self, state: AgentState) -> dict:  # noqa: ARG002
        logger.info("node_started", node="booking_form")
        return {"final_response": self.response_service.booking_form()}

    @timed_node("booking_confirm")
    def booking_confirmation_node(self, state: AgentState) -> dict:
        """Acknowledges a booking form submission."""
        logger.info("node_started", node="booking_confirm")
        action = state.get("action")
        event = action if isinstance(action, SubmitBookingEvent) else None
        return {"final_response": self.response_service.booking_confirmation(event)}

    @timed_node("services")
    def services_node(self, state: AgentState) -> dict:  # noqa: ARG002
        logger.info("node_started", node="services")
        return {"final_response": self.response_service.services()}

    @timed_node("emergency")
    def emergency_node(self, state: AgentState) -> dict:  # noqa: ARG002
        logger.info("node_started", node="emergency")
        return {"final_response": self.response_service.emergency()}

    @timed_node("general")
    async def general_chat_node(self, state: AgentState) -> dict:
        """
        Answers free text with the model (async).
        Model failures propagate out of the graph.
        """
        logger.info("node_started", node="general")
        response = await self.chat_service.answer(
            state["user_message"], state.get("chat_history") or []
        )
        return {"final_response": response}
