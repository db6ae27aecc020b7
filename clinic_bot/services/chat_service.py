"""
Chat service answering free-text questions with the model.
"""

from clinic_bot.database.doctors import DoctorRegistry
from clinic_bot.models.schemas import TextResponse
from clinic_bot.services.llm_service import ExternalCall, FailurePolicy, LLMService
from clinic_bot.utils.prompts import load_prompts
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)
PROMPTS = load_prompts()

# No local fallback: a failed answer surfaces as the turn-level apology.
GENERAL_CHAT_CALL = ExternalCall(
    name="general_chat",
    policy=FailurePolicy.PROPAGATE,
)

BOLD_MARKUP = "**"


class ChatService:
    """Generates persona answers for general questions."""

    def __init__(self, llm_service: LLMService, registry: DoctorRegistry):
        self.llm_service = llm_service
        self.registry = registry

    async def answer(self, user_message: str, chat_history: list[str]) -> TextResponse:
        """
        Answers a free-text message using the full chat history.

        Args:
            user_message: Raw user message
            chat_history: Prior chat lines, oldest first

        Returns:
            TextResponse with the model reply, bold markup removed

        Raises:
            LLMError: If the model call fails
        """
        prompt = self.build_prompt(user_message, chat_history)
        reply = await self.llm_service.generate(prompt, GENERAL_CHAT_CALL)
        logger.info("general_chat_answered", reply_length=len(reply))
        return TextResponse(text=reply.replace(BOLD_MARKUP, ""))

    def build_prompt(self, user_message: str, chat_history: list[str]) -> str:
        template = PROMPTS["general_chat"]["prompt_template"]
        return template.format(
            history="\n".join(chat_history),
            user_message=user_message,
            doctor_name=self.registry.default.name,
        )
