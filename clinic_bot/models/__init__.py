"""
Models package exports for domain state, wire schemas, and action events.
"""

from clinic_bot.models.domain import (
    AgentState,
    DoctorProfile,
    Intent,
    MODEL_REACHABLE_INTENTS,
)
from clinic_bot.models.schemas import (
    Button,
    BookingFormResponse,
    CardResponse,
    ChatRequest,
    StructuredResponse,
    TextResponse,
    WelcomeCardResponse,
)
from clinic_bot.models.events import (
    ActionEvent,
    InitChatEvent,
    NavigateBookingEvent,
    SubmitBookingEvent,
    ViewDetailsEvent,
)

__all__ = [
    "AgentState",
    "DoctorProfile",
    "Intent",
    "MODEL_REACHABLE_INTENTS",
    "Button",
    "BookingFormResponse",
    "CardResponse",
    "ChatRequest",
    "StructuredResponse",
    "TextResponse",
    "WelcomeCardResponse",
    "ActionEvent",
    "InitChatEvent",
    "NavigateBookingEvent",
    "SubmitBookingEvent",
    "ViewDetailsEvent",
]
