"""Policy Navigator — HR policy assistant using LLM tool-calling.

Answers questions from a fixed knowledge base and can look up the caller's
own request history. The loop is Think → Act → Observe, capped at
MAX_ITERATIONS. The assistant never mutates anything.

Session logging: every invocation records session_id, tool calls, token
usage and latency for observability.
"""
import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

import openai
from sqlalchemy.orm import Session

from talent_portal.agent.tools import clarify, request_history
from talent_portal.config import settings
from talent_portal.errors import PortalError
from talent_portal.services import ai_service

logger = logging.getLogger(__name__)

# ── Tool registry ──────────────────────────────────────────────────
TOOLS = {
    "RequestHistory": request_history,
    "ClarifyWithUser": clarify,
}

TOOL_SCHEMAS = [mod.TOOL_SCHEMA for mod in TOOLS.values()]

MAX_ITERATIONS = 4

# ── System prompt ──────────────────────────────────────────────────
SYSTEM_PROMPT = """You are the AI Policy Navigator for CAPACITI. Your goal is to assist employees and managers with HR policies, onboarding, and compliance.
Use the following context as your knowledge base:

[CAPACITI KNOWLEDGE BASE]
1. LEAVE POLICY: Employees accrue 1.25 days of leave per month. Sick leave requires a medical certificate if absent for more than 2 days.
2. REMOTE WORK: Remote work is permitted for Tech Champions and Senior Managers on Tuesdays and Thursdays. Candidates must be on-site.
3. ONBOARDING: Day 1 includes IT setup and HR orientation. Day 2-5 involves technical bootcamps.
4. EXPENSES: All travel expenses must be pre-approved by a Manager. Receipts must be uploaded within 48 hours.
5. CODE OF CONDUCT: Respect, Integrity, and Innovation are our core values. Harassment of any kind is zero-tolerance.
6. IT SUPPORT: Submit tickets via the portal. Severity 1 issues are resolved in 4 hours.

TOOLS:
- RequestHistory: the user's own leave requests, IT tickets and pending profile update
- ClarifyWithUser: ask the user a clarifying question

If the user asks something not covered here, politely explain you only have access to core HR policies.
Keep answers concise and helpful.

CONTEXT:
- User: {user_name} ({role})
- Current UTC time: {current_time}
"""

UNAVAILABLE_REPLY = "I'm having trouble connecting to the policy database. Please try again later."


def run_agent(
    db: Session,
    user_message: str,
    user_id: str,
    user_name: str,
    role: str,
    conversation_history: Optional[list[dict]] = None,
) -> dict[str, Any]:
    """Execute the tool-calling loop for a single user message.

    Returns:
        {
            "response": str,            # Final text for the user
            "tool_calls": list[dict],   # Tools called, with args/result/error
            "requires_clarification": bool,
            "session_log": dict,        # Observability data
        }
    """
    session_id = str(uuid.uuid4())
    session_log = {
        "session_id": session_id,
        "started_at": datetime.now(timezone.utc).isoformat(),
        "user_id": user_id,
        "total_tokens": 0,
        "latency_ms": 0,
    }
    start_time = time.time()

    def _result(response: str, tool_calls: list[dict], requires_clarification: bool = False) -> dict[str, Any]:
        session_log["latency_ms"] = int((time.time() - start_time) * 1000)
        return {
            "response": response,
            "tool_calls": tool_calls,
            "requires_clarification": requires_clarification,
            "session_log": session_log,
        }

    if not ai_service.api_key_configured():
        logger.warning("OpenAI API key not configured — returning placeholder response")
        return _result(
            "The Policy Navigator isn't configured yet. Please ask an administrator "
            "to add an OpenAI API key to the backend `.env` file.\n\n"
            "In the meantime, the Documents library has the full policy handbook.",
            [],
        )

    system = SYSTEM_PROMPT.format(
        user_name=user_name,
        role=role,
        current_time=datetime.now(timezone.utc).isoformat(),
    )
    messages: list[dict[str, Any]] = [{"role": "system", "content": system}]
    if conversation_history:
        messages.extend(conversation_history)
    messages.append({"role": "user", "content": user_message})

    client = ai_service.get_client()
    all_tool_calls: list[dict] = []

    for iteration in range(MAX_ITERATIONS):
        try:
            response = client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=messages,
                tools=TOOL_SCHEMAS,
                tool_choice="auto",
            )
        except openai.OpenAIError as e:
            logger.error("Policy chat error: %s", e)
            session_log["error"] = str(e)
            return _result(UNAVAILABLE_REPLY, all_tool_calls)

        message = response.choices[0].message
        if response.usage:
            session_log["total_tokens"] += response.usage.total_tokens

        if not message.tool_calls:
            logger.info(
                "[Session %s] Policy chat finished in %d iterations, %d tokens",
                session_id, iteration + 1, session_log["total_tokens"],
            )
            return _result(message.content or "Done!", all_tool_calls)

        messages.append(message.model_dump())
        for tool_call in message.tool_calls:
            fn_name = tool_call.function.name
            try:
                fn_args = json.loads(tool_call.function.arguments or "{}")
            except json.JSONDecodeError:
                fn_args = {}

            tool_log = {"tool": fn_name, "args": fn_args, "result": None, "error": None}
            logger.info("[Session %s] Tool call: %s(%s)", session_id, fn_name, fn_args)

            tool_module = TOOLS.get(fn_name)
            if not tool_module:
                tool_log["error"] = f"Unknown tool: {fn_name}"
                result_str = json.dumps({"error": tool_log["error"]})
            else:
                try:
                    result = tool_module.execute(db, fn_args, user_id)
                except PortalError as e:
                    logger.error("Tool %s error: %s", fn_name, e)
                    tool_log["error"] = e.message
                    result_str = json.dumps({"error": e.message})
                else:
                    tool_log["result"] = result
                    if fn_name == "ClarifyWithUser":
                        all_tool_calls.append(tool_log)
                        return _result(result["question"], all_tool_calls, requires_clarification=True)
                    result_str = json.dumps(result, default=str)

            all_tool_calls.append(tool_log)
            messages.append({"role": "tool", "tool_call_id": tool_call.id, "content": result_str})

    logger.warning("[Session %s] Hit max iterations (%d)", session_id, MAX_ITERATIONS)
    return _result(
        "I've been working on your question but it's taking longer than expected. Could you rephrase it?",
        all_tool_calls,
    )
