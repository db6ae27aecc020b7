"""
Parses widget action tokens into action events.

Token convention (fields are ``_``-separated):
    INIT_CHAT
    ACTION_NAVIGATE_BOOKING
    ACTION_DETAILS_<doctor_id>
    ACTION_SUBMIT_BOOKING_NAME_<name tokens>_PHONE_<phone tokens>
"""

from clinic_bot.models.events import (
    ActionEventVariant,
    InitChatEvent,
    NavigateBookingEvent,
    SubmitBookingEvent,
    ViewDetailsEvent,
)
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)

INIT_CHAT = "INIT_CHAT"
NAVIGATE_BOOKING = "ACTION_NAVIGATE_BOOKING"
SUBMIT_BOOKING = "ACTION_SUBMIT_BOOKING"
VIEW_DETAILS = "ACTION_DETAILS"

TOKEN_SEPARATOR = "_"
NAME_MARKER = "NAME"
PHONE_MARKER = "PHONE"


def details_payload(doctor_id: str) -> str:
    """Builds the token sent by a doctor card's "View Details" button."""
    return f"{VIEW_DETAILS}{TOKEN_SEPARATOR}{doctor_id}"


def parse_action(message: str) -> ActionEventVariant | None:
    """
    Parses a message into an action event; first matching rule wins.

    Args:
        message: Raw message from the widget

    Returns:
        The action event, or None for free text
    """
    msg = message.strip()

    if msg == INIT_CHAT:
        return InitChatEvent()
    if NAVIGATE_BOOKING in msg:
        return NavigateBookingEvent()
    if SUBMIT_BOOKING in msg:
        return parse_booking_submission(message)
    if VIEW_DETAILS in msg:
        doctor_id = TOKEN_SEPARATOR.join(msg.split(TOKEN_SEPARATOR)[2:])
        return ViewDetailsEvent(doctor_id=doctor_id)
    return None


def parse_booking_submission(message: str) -> SubmitBookingEvent:
    """
    Extracts name and phone from a booking submission token.

    The name is every token strictly between ``NAME`` and ``PHONE`` and the
    phone every token after ``PHONE``, each joined by spaces. If a marker is
    missing or parsing fails, the event carries no fields.

    Args:
        message: Raw submission token

    Returns:
        SubmitBookingEvent, complete only when both markers were found
    """
    try:
        parts = message.split(TOKEN_SEPARATOR)
        if NAME_MARKER not in parts or PHONE_MARKER not in parts:
            logger.warning(
                "booking_fields_missing",
                has_name=NAME_MARKER in parts,
                has_phone=PHONE_MARKER in parts,
            )
            return SubmitBookingEvent()

        name_index = parts.index(NAME_MARKER)
        phone_index = parts.index(PHONE_MARKER)
        return SubmitBookingEvent(
            name=" ".join(parts[name_index + 1 : phone_index]),
            phone=" ".join(parts[phone_index + 1 :]),
        )
    except Exception as e:
        logger.error("booking_parse_failed", exc_info=True, error=str(e))
        return SubmitBookingEvent()
