"""Policy Navigator routes — wires the chat agent to the HTTP layer."""
import logging
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from talent_portal.database import get_db
from talent_portal.agent.policy_agent import run_agent
from talent_portal.models.user import User
from talent_portal.permissions import require_view

logger = logging.getLogger(__name__)
router = APIRouter()


class ChatMessage(BaseModel):
    message: str
    history: list[dict] = []


class ChatResponse(BaseModel):
    response: str
    tool_calls: list[dict] = []
    requires_clarification: bool = False


@router.post("/chat", response_model=ChatResponse)
def policy_chat(
    payload: ChatMessage,
    db: Session = Depends(get_db),
    actor: User = Depends(require_view("documents")),
):
    """Ask the Policy Navigator a question — runs the full tool-calling loop."""
    logger.info("Policy chat from user %s: %s", actor.user_id, payload.message)

    result = run_agent(
        db=db,
        user_message=payload.message,
        user_id=actor.user_id,
        user_name=actor.display_name,
        role=actor.role.value,
        conversation_history=payload.history,
    )

    session_log = result.get("session_log", {})
    logger.info(
        "Policy session %s completed: %d tool calls, %d tokens, %dms",
        session_log.get("session_id", "?"),
        len(result.get("tool_calls", [])),
        session_log.get("total_tokens", 0),
        session_log.get("latency_ms", 0),
    )

    return ChatResponse(
        response=result["response"],
        tool_calls=result.get("tool_calls", []),
        requires_clarification=result.get("requires_clarification", False),
    )
