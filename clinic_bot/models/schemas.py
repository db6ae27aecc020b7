"""
Wire schemas for the chat endpoint.
The structured response is a tagged union discriminated by ``type``.
"""

from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, field_validator


class Button(BaseModel):
    """Quick-reply button; the widget sends ``payload`` back as the next message."""

    label: str = Field(description="Text shown on the button")
    payload: str = Field(description="Message or action token sent when clicked")


class _ResponseBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    text: str = Field(description="Text shown in the bot bubble")

    def to_payload(self) -> dict:
        """Serializes the response, omitting absent optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class WelcomeCardResponse(_ResponseBase):
    """Greeting card with quick replies."""

    type: Literal["welcome_card"] = "welcome_card"
    buttons: list[Button]


class CardResponse(_ResponseBase):
    """Card with an optional image and action buttons."""

    type: Literal["card"] = "card"
    image: Optional[str] = None
    buttons: list[Button]


class TextResponse(_ResponseBase):
    """Plain text bubble with optional buttons."""

    type: Literal["text"] = "text"
    buttons: Optional[list[Button]] = None


class BookingFormResponse(_ResponseBase):
    """Tells the widget to render its booking form."""

    type: Literal["booking_form"] = "booking_form"


ResponseVariant = Union[
    WelcomeCardResponse, CardResponse, TextResponse, BookingFormResponse
]
StructuredResponse = Annotated[
    ResponseVariant,
    Field(discriminator="type"),
]


class ChatRequest(BaseModel):
    """
    Body of ``POST /api/chat``.
    ``history`` holds prior turns in chronological order.
    """

    message: str = Field(description="User utterance or action token")
    history: list[str] = Field(
        default_factory=list, description="Prior chat lines, oldest first"
    )

    @field_validator("history", mode="before")
    @classmethod
    def _null_history_is_empty(cls, value):
        return [] if value is None else value

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Who is the doctor?",
                "history": ["Namaste! 🙏 Welcome to Smile Science Dentistry."],
            }
        }
    )
