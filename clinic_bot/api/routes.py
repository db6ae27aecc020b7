"""
Chat endpoint consumed by the website widget.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from clinic_bot.models.schemas import ChatRequest, StructuredResponse
from clinic_bot.orchestrator import ChatOrchestrator

router = APIRouter(tags=["chat"])


def get_orchestrator(request: Request) -> ChatOrchestrator:
    """Returns the orchestrator created at application startup."""
    return request.app.state.orchestrator


@router.post(
    "/chat",
    response_model=StructuredResponse,
    responses={500: {"description": "Turn failed; body carries the apology text"}},
)
async def chat(
    body: ChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    """
    Handles one chat turn.

    Args:
        body: Message (or action token) and prior chat lines

    Returns:
        The structured response; HTTP 500 with the apology if the turn failed
    """
    result = await orchestrator.handle_turn(body.message, body.history)
    return JSONResponse(
        status_code=(
            status.HTTP_500_INTERNAL_SERVER_ERROR if result.failed else status.HTTP_200_OK
        ),
        content=result.response.to_payload(),
    )
