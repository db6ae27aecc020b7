"""
Graph builder for constructing the LangGraph chat workflow.
Assembles nodes, edges, and services into an executable graph.
"""

from langchain_core.language_models.chat_models import BaseChatModel
from langgraph.graph import StateGraph, END

from clinic_bot import config
from clinic_bot.database.doctors import DoctorRegistry
from clinic_bot.models.domain import AgentState
from clinic_bot.services.llm_service import LLMService, create_llm
from clinic_bot.services.intent_service import IntentService
from clinic_bot.services.response_service import ResponseService
from clinic_bot.services.chat_service import ChatService
from clinic_bot.graph.nodes import GraphNodes
from clinic_bot.graph.edges import Handler, route_after_classifier
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)


def create_llm_service(
    model: BaseChatModel | None = None,
    settings: config.Settings | None = None,
) -> LLMService:
    """
    Builds the LLM service, creating the chat model from settings if needed.

    Args:
        model: Pre-built chat model (tests pass a stub here)
        settings: Settings to read (defaults to the cached instance)

    Returns:
        Configured LLMService
    """
    settings = settings or config.get_settings()
    if model is None:
        model = create_llm(
            model_name=settings.llm_model,
            api_key=config.api_key_for(settings.llm_model, settings),
            temperature=settings.llm_temperature,
        )
    return LLMService(
        model=model,
        max_attempts=settings.llm_max_attempts,
        timeout=settings.llm_timeout,
    )


def build_graph(
    llm_service: LLMService | None = None,
    registry: DoctorRegistry | None = None,
    settings: config.Settings | None = None,
):
    """
    Builds and compiles the chat workflow.

    Args:
        llm_service: LLM service shared by the classifier and general chat
        registry: Doctor profiles (defaults to the seeded registry)
        settings: Settings to read (defaults to the cached instance)

    Returns:
        Compiled graph ready for execution
    """
    logger.info("graph_components_initializing")

    settings = settings or config.get_settings()
    llm_service = llm_service or create_llm_service(settings=settings)
    registry = registry or DoctorRegistry()

    nodes = GraphNodes(
        intent_service=IntentService(
            llm_service, history_window=settings.history_window
        ),
        response_service=ResponseService(registry),
        chat_service=ChatService(llm_service, registry),
        registry=registry,
    )

    logger.info("graph_workflow_building")
    workflow = StateGraph(AgentState)

    workflow.add_node("classifier", nodes.classifier_node)
    workflow.add_node(Handler.WELCOME.value, nodes.welcome_node)
    workflow.add_node(Handler.FIND_DOCTOR.value, nodes.doctor_profile_node)
    workflow.add_node(Handler.DOCTOR_DETAILS.value, nodes.doctor_details_node)
    workflow.add_node(Handler.BOOKING_FORM.value, nodes.booking_form_node)
    workflow.add_node(Handler.BOOKING_CONFIRM.value, nodes.booking_confirmation_node)
    workflow.add_node(Handler.SERVICES.value, nodes.services_node)
    workflow.add_node(Handler.EMERGENCY.value, nodes.emergency_node)
    workflow.add_node(Handler.GENERAL.value, nodes.general_chat_node)

    workflow.set_entry_point("classifier")

    workflow.add_conditional_edges(
        "classifier",
        route_after_classifier,
        {handler.value: handler.value for handler in Handler},
    )

    # Exactly one handler runs per turn
    for handler in Handler:
        workflow.add_edge(handler.value, END)

    logger.info("graph_compiling")
    return workflow.compile()
