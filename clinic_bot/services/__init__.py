"""
Services package exports for business logic layer.
"""

from clinic_bot.services.llm_service import (
    ExternalCall,
    FailurePolicy,
    LLMService,
    LLMError,
    LLMTimeoutError,
    create_llm,
)
from clinic_bot.services.action_parser import parse_action, parse_booking_submission
from clinic_bot.services.intent_service import IntentService
from clinic_bot.services.response_service import ResponseService, fallback_response
from clinic_bot.services.chat_service import ChatService

__all__ = [
    "ExternalCall",
    "FailurePolicy",
    "LLMService",
    "LLMError",
    "LLMTimeoutError",
    "create_llm",
    "parse_action",
    "parse_booking_submission",
    "IntentService",
    "ResponseService",
    "fallback_response",
    "ChatService",
]
