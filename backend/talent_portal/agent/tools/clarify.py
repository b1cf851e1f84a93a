"""ClarifyWithUser tool.

Suspends the agent loop and returns a question to the user. When invoked,
the agent stops iterating and hands the question back to the client.
"""
from typing import Any
from sqlalchemy.orm import Session


TOOL_SCHEMA = {
    "type": "function",
    "function": {
        "name": "ClarifyWithUser",
        "description": (
            "Ask the user a clarifying question before answering. Use this when "
            "the question is ambiguous, e.g. which kind of leave or which request "
            "they mean."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "question": {
                    "type": "string",
                    "description": "The question to ask the user.",
                },
            },
            "required": ["question"],
        },
    },
}


def execute(db: Session, args: dict[str, Any], user_id: str) -> dict[str, Any]:
    """Return the clarification payload — the agent loop handles suspension."""
    return {
        "requires_clarification": True,
        "question": args["question"],
    }
