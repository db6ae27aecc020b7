"""
Response service building the fixed structured responses.
All methods are synchronous and side-effect free.
"""

from clinic_bot.database.doctors import DoctorRegistry
from clinic_bot.models.domain import DoctorProfile
from clinic_bot.models.events import SubmitBookingEvent
from clinic_bot.models.schemas import (
    BookingFormResponse,
    Button,
    CardResponse,
    TextResponse,
    WelcomeCardResponse,
)
from clinic_bot.services.action_parser import (
    INIT_CHAT,
    NAVIGATE_BOOKING,
    details_payload,
)
from clinic_bot.utils.prompts import load_prompts
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)
PROMPTS = load_prompts()
RESPONSES = PROMPTS["responses"]


class ResponseService:
    """
    Builds the response for every intent except general chat.
    """

    def __init__(self, registry: DoctorRegistry):
        self.registry = registry

    def welcome(self) -> WelcomeCardResponse:
        """Greeting card with the four quick replies."""
        copy = RESPONSES["welcome"]
        doctor_name = self.registry.default.name
        return WelcomeCardResponse(
            text=copy["text"],
            buttons=[
                Button(
                    label=button["label"].format(doctor_name=doctor_name),
                    payload=button["payload"],
                )
                for button in copy["buttons"]
            ],
        )

    def doctor_profile(self, doctor: DoctorProfile) -> CardResponse:
        """Introductory card for ``doctor`` with details and booking buttons."""
        copy = RESPONSES["doctor_profile"]
        return CardResponse(
            text=copy["text_template"].format(
                name=doctor.name, short_bio=doctor.short_bio
            ),
            image=doctor.image_url,
            buttons=[
                Button(label=copy["details_label"], payload=details_payload(doctor.id)),
                Button(label=copy["booking_label"], payload=NAVIGATE_BOOKING),
            ],
        )

    def doctor_details(self, doctor_id: str | None) -> CardResponse:
        """
        Detail card for ``doctor_id``; unknown or missing ids show the default doctor.
        """
        copy = RESPONSES["doctor_details"]
        doctor = self.registry.resolve(doctor_id)
        return CardResponse(
            text=copy["text_template"].format(
                name=doctor.name,
                specialty=doctor.specialty,
                short_bio=doctor.short_bio,
                availability=copy["availability"],
            ),
            buttons=[
                Button(
                    label=copy["booking_label"].format(
                        name=self.registry.default.name
                    ),
                    payload=NAVIGATE_BOOKING,
                )
            ],
        )

    def booking_form(self) -> BookingFormResponse:
        text = RESPONSES["booking_form"]["text"]
        return BookingFormResponse(
            text=text.format(doctor_name=self.registry.default.name)
        )

    def booking_confirmation(self, event: SubmitBookingEvent | None) -> TextResponse:
        """
        Thank-you message for a booking submission.
        Falls back to a generic text when name or phone could not be parsed.

        Args:
            event: Parsed submission, or None if the turn carried none

        Returns:
            TextResponse with a "Start New Chat" button
        """
        copy = RESPONSES["booking_confirmation"]
        if event is not None and event.is_complete:
            text = copy["personalized_template"].format(
                name=event.name,
                phone=event.phone,
                doctor_name=self.registry.default.name,
            )
            logger.info("booking_request_received", personalized=True)
        else:
            text = copy["generic_text"]
            logger.info("booking_request_received", personalized=False)

        return TextResponse(
            text=text,
            buttons=[Button(label=copy["restart_label"], payload=INIT_CHAT)],
        )

    def services(self) -> TextResponse:
        copy = RESPONSES["services"]
        return TextResponse(
            text=copy["text"],
            buttons=[Button(label=copy["booking_label"], payload=NAVIGATE_BOOKING)],
        )

    def emergency(self) -> TextResponse:
        copy = RESPONSES["emergency"]
        return TextResponse(
            text=copy["text"],
            buttons=[
                Button(label=copy["call_label"], payload=copy["call_payload"]),
                Button(label=copy["booking_label"], payload=NAVIGATE_BOOKING),
            ],
        )


def fallback_response() -> TextResponse:
    """Apology shown when a turn fails; points the user to the clinic phone."""
    return TextResponse(text=PROMPTS["constants"]["fallback_message"])
