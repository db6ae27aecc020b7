"""
Chat orchestrator running one turn through the graph.
This is the single place where turn failures are caught.
"""

from dataclasses import dataclass

from langchain_core.language_models.chat_models import BaseChatModel

from clinic_bot import config
from clinic_bot.database.doctors import DoctorRegistry
from clinic_bot.graph.builder import build_graph, create_llm_service
from clinic_bot.models.schemas import ResponseVariant
from clinic_bot.services.response_service import fallback_response
from clinic_bot.utils.metrics import MetricsTracker
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)


class MissingResponseError(RuntimeError):
    """Raised when the graph finished without a handler response."""


@dataclass(frozen=True)
class TurnResult:
    """
    Outcome of one turn.

    Attributes:
        response: Structured response for the widget
        failed: True if the turn failed and ``response`` is the apology
    """

    response: ResponseVariant
    failed: bool = False


class ChatOrchestrator:
    """
    Runs classify -> route -> handle for one turn and contains all failures.
    Holds no per-turn state; safe to share across concurrent requests.
    """

    def __init__(self, graph):
        """
        Args:
            graph: Compiled chat workflow
        """
        self.graph = graph

    @classmethod
    def from_settings(
        cls,
        model: BaseChatModel | None = None,
        registry: DoctorRegistry | None = None,
        settings: config.Settings | None = None,
    ) -> "ChatOrchestrator":
        """
        Builds the orchestrator and its graph.

        Args:
            model: Chat model to use instead of the configured one
            registry: Doctor profiles (defaults to the seeded registry)
            settings: Settings to read (defaults to the cached instance)
        """
        settings = settings or config.get_settings()
        llm_service = create_llm_service(model=model, settings=settings)
        return cls(build_graph(llm_service, registry=registry, settings=settings))

    async def handle_turn(
        self, user_message: str, chat_history: list[str] | None = None
    ) -> TurnResult:
        """
        Produces the response for one chat turn.

        Args:
            user_message: Raw message or action token
            chat_history: Prior chat lines, oldest first

        Returns:
            TurnResult; on any failure the fixed apology with ``failed=True``
        """
        tracker = MetricsTracker()
        intent = None
        try:
            result = await self.graph.ainvoke(
                {
                    "user_message": user_message,
                    "chat_history": list(chat_history or []),
                }
            )
            intent = result.get("intent")
            response = result.get("final_response")
            if response is None:
                raise MissingResponseError(
                    f"No response produced for intent '{intent}'"
                )
            return TurnResult(response=response)

        except Exception as e:
            logger.error(
                "chat_turn_failed",
                exc_info=True,
                error=str(e),
                error_type=type(e).__name__,
            )
            return TurnResult(response=fallback_response(), failed=True)

        finally:
            tracker.finalize(intent=getattr(intent, "value", intent))
