"""
Action events sent by the chat widget.
The widget encodes UI events as ``ACTION_*`` tokens in the message field;
they are parsed once at ingress into these models.
"""

from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, ConfigDict


class _EventBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class InitChatEvent(_EventBase):
    """The widget opened or restarted the conversation."""

    kind: Literal["init_chat"] = "init_chat"


class NavigateBookingEvent(_EventBase):
    """A booking button was clicked."""

    kind: Literal["navigate_booking"] = "navigate_booking"


class SubmitBookingEvent(_EventBase):
    """
    The booking form was submitted.
    ``name``/``phone`` are None when the token could not be parsed.
    """

    kind: Literal["submit_booking"] = "submit_booking"
    name: Optional[str] = None
    phone: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.name is not None and self.phone is not None


class ViewDetailsEvent(_EventBase):
    """The "View Details" button of a doctor card was clicked."""

    kind: Literal["view_details"] = "view_details"
    doctor_id: str = ""


ActionEventVariant = Union[
    InitChatEvent, NavigateBookingEvent, SubmitBookingEvent, ViewDetailsEvent
]
ActionEvent = Annotated[
    ActionEventVariant,
    Field(discriminator="kind"),
]
