"""
Entry point for the clinic chat workflow.
Exposes the compiled graph for LangGraph Studio and runs a console chat
that plays the role of the website widget.
"""

import asyncio
from clinic_bot import config
from clinic_bot.graph.builder import build_graph
from clinic_bot.orchestrator import ChatOrchestrator
from clinic_bot.services.action_parser import INIT_CHAT
from clinic_bot.utils.logger import configure_logging, get_logger, new_request_id, set_request_id

configure_logging(level="INFO", use_structured=False)

logger = get_logger(__name__)

logger.info("graph_build_started", mode="studio")
app = build_graph()
logger.info("graph_build_completed", mode="studio")


def render(response) -> list[str]:
    """Prints a structured response and returns its button payloads."""
    print(f"\n[{response.type}]")
    print(response.text)
    if getattr(response, "image", None):
        print(f"(image: {response.image})")
    buttons = getattr(response, "buttons", None) or []
    for i, button in enumerate(buttons, start=1):
        print(f"  {i}. {button.label} -> {button.payload}")
    return [button.payload for button in buttons]


async def run_console_chat():
    """
    Console loop. Typing a button number sends its payload; history is kept
    here, as the widget would keep it.
    """
    config.check_env_vars()
    orchestrator = ChatOrchestrator(app)
    history: list[str] = []

    print("\n" + "=" * 60)
    print("Clinic Chat - Type 'exit' or 'quit' to stop")
    print("=" * 60)

    message = INIT_CHAT
    while True:
        set_request_id(new_request_id())
        result = await orchestrator.handle_turn(message, history)
        if message != INIT_CHAT:
            history.append(f"User: {message}")
        history.append(f"Bot: {result.response.text}")
        payloads = render(result.response)

        try:
            user_input = input("\nYou: ").strip()
        except (KeyboardInterrupt, EOFError):
            logger.info("conversation_interrupted_by_user")
            break
        if user_input.lower() in ["exit", "quit"]:
            break
        if user_input.isdigit() and 0 < int(user_input) <= len(payloads):
            user_input = payloads[int(user_input) - 1]
        if user_input == INIT_CHAT:
            history = []
        message = user_input

    print("\nGoodbye! Keep smiling.")


if __name__ == "__main__":
    asyncio.run(run_console_chat())
