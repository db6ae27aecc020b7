"""
Domain models representing the core business entities and state.
AgentState is the per-request state object threaded through the LangGraph workflow.
"""

from enum import Enum
from typing import Any, Optional
from typing_extensions import TypedDict
from pydantic import BaseModel, ConfigDict, Field

from clinic_bot.models.events import ActionEventVariant
from clinic_bot.models.schemas import ResponseVariant


class Intent(str, Enum):
    """Closed set of intents a user turn can resolve to."""

    WELCOME = "welcome"
    FIND_DOCTOR = "find_doctor"
    DOCTOR_DETAILS = "doctor_details"
    BOOKING_FORM_REQUEST = "booking_form_request"
    BOOKING_SUBMISSION = "booking_submission"
    SERVICES_LIST = "services_list"
    EMERGENCY = "emergency"
    GENERAL_CHAT = "general_chat"

    @classmethod
    def coerce(cls, value: Any) -> "Intent":
        """
        Resolves any value to a member, falling back to GENERAL_CHAT.

        Args:
            value: Intent member, label string, or anything else

        Returns:
            Matching Intent, or Intent.GENERAL_CHAT if unrecognized
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.GENERAL_CHAT


# Labels the model may return; the rest are reachable only through action tokens.
MODEL_REACHABLE_INTENTS: frozenset[Intent] = frozenset(
    {
        Intent.FIND_DOCTOR,
        Intent.SERVICES_LIST,
        Intent.EMERGENCY,
        Intent.BOOKING_FORM_REQUEST,
        Intent.GENERAL_CHAT,
    }
)


class DoctorProfile(BaseModel):
    """Static doctor record served by the knowledge store."""

    id: str = Field(description="Stable identifier used in action tokens")
    name: str
    specialty: str
    image_url: str
    short_bio: str

    model_config = ConfigDict(frozen=True)


class AgentState(TypedDict, total=False):
    """
    Represents the state of one chat turn.
    Created fresh per request and discarded once the response is returned.

    Attributes:
        user_message: Raw message or action token sent by the widget.
        chat_history: Prior turns, chronological, supplied by the caller.
        intent: Classified intent of the message.
        action: Parsed action event, if the message was an action token.
        selected_doctor_id: Doctor referenced by the turn, if any.
        doctor_data: Profile looked up by the doctor-profile handler.
        final_response: Structured response produced by the single handler.
    """

    user_message: str
    chat_history: list[str]
    intent: Intent
    action: Optional[ActionEventVariant]
    selected_doctor_id: Optional[str]
    doctor_data: Optional[DoctorProfile]
    final_response: Optional[ResponseVariant]
