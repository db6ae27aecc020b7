"""
Graph edge conditions for routing between nodes.
Maps every intent to exactly one handler node.
"""

from enum import Enum
from typing import Any

from clinic_bot.models.domain import AgentState, Intent
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)


class Handler(str, Enum):
    """Names of the handler nodes in the graph."""

    WELCOME = "welcome"
    FIND_DOCTOR = "find_doctor"
    DOCTOR_DETAILS = "doctor_details"
    BOOKING_FORM = "booking_form"
    BOOKING_CONFIRM = "booking_confirm"
    SERVICES = "services"
    EMERGENCY = "emergency"
    GENERAL = "general"


INTENT_ROUTES: dict[Intent, Handler] = {
    Intent.WELCOME: Handler.WELCOME,
    Intent.FIND_DOCTOR: Handler.FIND_DOCTOR,
    Intent.DOCTOR_DETAILS: Handler.DOCTOR_DETAILS,
    Intent.BOOKING_FORM_REQUEST: Handler.BOOKING_FORM,
    Intent.BOOKING_SUBMISSION: Handler.BOOKING_CONFIRM,
    Intent.SERVICES_LIST: Handler.SERVICES,
    Intent.EMERGENCY: Handler.EMERGENCY,
    Intent.GENERAL_CHAT: Handler.GENERAL,
}

DEFAULT_HANDLER = Handler.GENERAL


def verify_routes(routes: dict[Intent, Handler]) -> None:
    """
    Checks that ``routes`` covers every intent and reaches every handler.

    Raises:
        RuntimeError: If an intent is unrouted or a handler is unreachable
    """
    missing = set(Intent) - routes.keys()
    if missing:
        raise RuntimeError(
            f"Intents without a handler: {sorted(i.value for i in missing)}"
        )
    unreachable = set(Handler) - set(routes.values())
    if unreachable:
        raise RuntimeError(
            f"Handlers without an intent: {sorted(h.value for h in unreachable)}"
        )


verify_routes(INTENT_ROUTES)


def route(intent: Any) -> str:
    """
    Returns the handler node name for ``intent``.
    Unknown labels go to the general handler.

    Args:
        intent: Intent member or raw label

    Returns:
        Handler node name
    """
    resolved = Intent.coerce(intent)
    if resolved is Intent.GENERAL_CHAT and intent != Intent.GENERAL_CHAT.value:
        logger.warning("unroutable_intent", intent=str(intent), fallback="general")
    return INTENT_ROUTES.get(resolved, DEFAULT_HANDLER).value


def route_after_classifier(state: AgentState) -> str:
    """
    Routes the classified turn to its handler node.

    Args:
        state: Current agent state

    Returns:
        Next node name
    """
    intent = state.get("intent")
    if intent is None:
        logger.warning("no_intent_in_state", fallback="general")
        return DEFAULT_HANDLER.value
    return route(intent)
