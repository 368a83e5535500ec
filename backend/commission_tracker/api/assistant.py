from fastapi import APIRouter, Depends, HTTPException

from commission_tracker.schemas.assistant import AssistantReply, AssistantRequest
from commission_tracker.services.assistant import AssistantStub

router = APIRouter(prefix="/api/assistant", tags=["assistant"])


def get_assistant() -> AssistantStub:
    return AssistantStub()


@router.post("", response_model=AssistantReply)
async def ask_assistant(
    request: AssistantRequest,
    assistant: AssistantStub = Depends(get_assistant),
):
    """Answer a question about the statements parsed in the caller's session."""
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    reply = await assistant.respond(request.message, request.results)
    return {"reply": reply}
