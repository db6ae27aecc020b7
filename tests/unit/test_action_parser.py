"""
Unit tests for action token parsing.
"""

import pytest

from clinic_bot.models.events import (
    InitChatEvent,
    NavigateBookingEvent,
    SubmitBookingEvent,
    ViewDetailsEvent,
)
from clinic_bot.services.action_parser import (
    details_payload,
    parse_action,
    parse_booking_submission,
)


class TestParseAction:
    """Tests for rule matching order and token extraction."""

    def test_init_chat_exact_match(self):
        assert parse_action("INIT_CHAT") == InitChatEvent()

    def test_init_chat_ignores_surrounding_whitespace(self):
        assert parse_action("  INIT_CHAT\n") == InitChatEvent()

    def test_init_chat_must_be_whole_message(self):
        """Should treat INIT_CHAT inside other text as free text."""
        assert parse_action("please INIT_CHAT again") is None

    def test_navigate_booking_anywhere_in_message(self):
        result = parse_action("clicked ACTION_NAVIGATE_BOOKING from card")
        assert result == NavigateBookingEvent()

    def test_navigate_booking_wins_over_submission(self):
        result = parse_action("ACTION_NAVIGATE_BOOKING ACTION_SUBMIT_BOOKING_NAME_A_PHONE_1")
        assert isinstance(result, NavigateBookingEvent)

    def test_view_details_extracts_doctor_id(self):
        result = parse_action("ACTION_DETAILS_dr_pranjal")
        assert result == ViewDetailsEvent(doctor_id="dr_pranjal")

    def test_view_details_without_id(self):
        result = parse_action("ACTION_DETAILS")
        assert isinstance(result, ViewDetailsEvent)
        assert result.doctor_id == ""

    def test_details_payload_round_trips(self):
        result = parse_action(details_payload("dr_pranjal"))
        assert result.doctor_id == "dr_pranjal"

    @pytest.mark.parametrize(
        "message",
        ["Who is the doctor?", "I have an emergency", "", "ACTION", "init_chat"],
    )
    def test_free_text_is_not_an_action(self, message):
        assert parse_action(message) is None


class TestParseBookingSubmission:
    """Tests for name/phone extraction from submission tokens."""

    def test_extracts_multi_token_name_and_phone(self):
        result = parse_booking_submission(
            "ACTION_SUBMIT_BOOKING_NAME_Jane_Doe_PHONE_9999999999"
        )

        assert result.name == "Jane Doe"
        assert result.phone == "9999999999"
        assert result.is_complete

    def test_phone_tokens_joined_with_spaces(self):
        result = parse_booking_submission("ACTION_SUBMIT_BOOKING_NAME_Raj_PHONE_080_4890")
        assert result.phone == "080 4890"

    @pytest.mark.parametrize(
        "message",
        [
            "ACTION_SUBMIT_BOOKING",
            "ACTION_SUBMIT_BOOKING_NAME_Jane_Doe",
            "ACTION_SUBMIT_BOOKING_PHONE_9999999999",
            "ACTION_SUBMIT_BOOKING_name_Jane_phone_1",
        ],
    )
    def test_missing_markers_degrade_to_empty_event(self, message):
        result = parse_booking_submission(message)

        assert result == SubmitBookingEvent()
        assert not result.is_complete

    def test_parse_action_routes_submission(self):
        result = parse_action("ACTION_SUBMIT_BOOKING_NAME_Jane_PHONE_123")
        assert result == SubmitBookingEvent(name="Jane", phone="123")
