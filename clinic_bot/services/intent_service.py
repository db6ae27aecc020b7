"""
Intent service resolving a chat turn to one intent.
Action tokens are matched by rules; free text is classified by the model.
"""

from clinic_bot.models.domain import AgentState, Intent, MODEL_REACHABLE_INTENTS
from clinic_bot.models.events import ActionEventVariant, ViewDetailsEvent
from clinic_bot.services.action_parser import parse_action
from clinic_bot.services.llm_service import ExternalCall, FailurePolicy, LLMService
from clinic_bot.utils.prompts import load_prompts
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)
PROMPTS = load_prompts()

INTENT_CLASSIFICATION_CALL = ExternalCall(
    name="intent_classification",
    policy=FailurePolicy.DEGRADE,
    fallback=Intent.GENERAL_CHAT.value,
)

ACTION_INTENTS: dict[str, Intent] = {
    "init_chat": Intent.WELCOME,
    "navigate_booking": Intent.BOOKING_FORM_REQUEST,
    "submit_booking": Intent.BOOKING_SUBMISSION,
    "view_details": Intent.DOCTOR_DETAILS,
}


class IntentService:
    """
    Classifies user turns. Never raises: any fault resolves to GENERAL_CHAT.
    """

    def __init__(self, llm_service: LLMService, history_window: int = 5):
        """
        Initialize intent service.

        Args:
            llm_service: LLM service used for free-text classification
            history_window: Number of trailing history lines shown to the model
        """
        self.llm_service = llm_service
        self.history_window = history_window

    async def classify(self, user_message: str, chat_history: list[str]) -> Intent:
        """
        Resolves a message to an intent.

        Args:
            user_message: Raw message or action token
            chat_history: Prior chat lines, oldest first

        Returns:
            A member of Intent
        """
        intent, _ = await self._resolve(user_message, chat_history)
        return intent

    async def classify_turn(self, state: AgentState) -> dict:
        """
        Classifies the turn held in ``state``.

        Returns:
            State update with ``intent``, ``action`` and, for detail requests,
            ``selected_doctor_id``
        """
        intent, action = await self._resolve(
            state.get("user_message", ""), state.get("chat_history") or []
        )
        update: dict = {"intent": intent, "action": action}
        if isinstance(action, ViewDetailsEvent):
            update["selected_doctor_id"] = action.doctor_id
        return update

    async def _resolve(
        self, user_message: str, chat_history: list[str]
    ) -> tuple[Intent, ActionEventVariant | None]:
        try:
            action = parse_action(user_message)
            if action is not None:
                intent = ACTION_INTENTS[action.kind]
                logger.info(
                    "intent_classified", intent=intent.value, source="action_token"
                )
                return intent, action

            intent = await self._classify_with_llm(user_message.strip(), chat_history)
            logger.info("intent_classified", intent=intent.value, source="llm")
            return intent, None

        except Exception as e:
            logger.error(
                "intent_classification_failed",
                exc_info=True,
                error=str(e),
                default_intent=Intent.GENERAL_CHAT.value,
            )
            return Intent.GENERAL_CHAT, None

    async def _classify_with_llm(
        self, user_message: str, chat_history: list[str]
    ) -> Intent:
        prompt = self.build_prompt(user_message, chat_history)
        reply = await self.llm_service.generate(prompt, INTENT_CLASSIFICATION_CALL)
        return self.normalize_label(reply)

    def build_prompt(self, user_message: str, chat_history: list[str]) -> str:
        """Renders the classification prompt with the trailing history window."""
        window = chat_history[-self.history_window :] if self.history_window else []
        template = PROMPTS["intent_classification"]["prompt_template"]
        return template.format(history="\n".join(window), user_message=user_message)

    @staticmethod
    def normalize_label(reply: str) -> Intent:
        """
        Maps a raw model reply to a model-reachable intent.

        Args:
            reply: Model output, expected to be a single category word

        Returns:
            The matching intent, or GENERAL_CHAT for anything else
        """
        label = (reply or "").strip().lower()
        if label not in {intent.value for intent in MODEL_REACHABLE_INTENTS}:
            logger.warning("unrecognized_intent_label", label=label)
            return Intent.GENERAL_CHAT
        return Intent(label)
