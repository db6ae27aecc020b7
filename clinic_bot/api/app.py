"""
FastAPI application for the chat widget back-end.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinic_bot import __version__, config
from clinic_bot.api.middleware import RequestIdMiddleware
from clinic_bot.api.routes import router as chat_router
from clinic_bot.orchestrator import ChatOrchestrator
from clinic_bot.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Builds the orchestrator on startup unless one was injected.
    """
    if getattr(app.state, "orchestrator", None) is None:
        config.check_env_vars()
        app.state.orchestrator = ChatOrchestrator.from_settings()
    logger.info("chat_service_started", version=__version__)

    yield

    logger.info("chat_service_stopped")


def create_app(
    orchestrator: ChatOrchestrator | None = None,
    settings: config.Settings | None = None,
) -> FastAPI:
    """
    Creates the FastAPI application.

    Args:
        orchestrator: Pre-built orchestrator (tests inject one with a stub model)
        settings: Settings to read (defaults to the cached instance)

    Returns:
        Configured FastAPI application
    """
    settings = settings or config.get_settings()

    app = FastAPI(
        title="Clinic Chat Bot",
        description="Intent routing and responses for the clinic chat widget",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=["POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestIdMiddleware)

    app.include_router(chat_router, prefix="/api")

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok", "service": "clinic-chat-bot"}

    return app


def main() -> None:
    """Runs the API with uvicorn using the configured host and port."""
    import uvicorn

    settings = config.get_settings()
    configure_logging(level=settings.log_level, use_structured=settings.log_json)
    uvicorn.run(create_app(settings=settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
