"""Prompt Builder - Compiles the system directive and the user's question.

The conversation is always exactly two messages:
- a system message with the coach's role, the user id and the date window
- the user's question, verbatim
"""
from typing import Dict, Any, Tuple

from moneycoach.coach.schemas import ConversationMessage, DateRange
from moneycoach.coach.tools import GET_USER_TRANSACTIONS, get_tool_schemas


SYSTEM_ROLE = """You are the Money Coach, a friendly and practical assistant that helps people understand their personal finances.

## USER
- The user's ID is {user_id}.
- When you need the user's transactions, call '{tool_name}' with userId "{user_id}".

## DATE WINDOW
- Answer questions about transactions using only transactions dated from {start} to {end}.
- If the user explicitly asks about a different period, use the period they ask for instead, and pass it as startDate/endDate (YYYY-MM-DD).

## STYLE
- Cite specific amounts and dates from the transactions you were given.
- If the question does not need transaction data, answer directly without calling a tool.
- Do not give investment, tax, or legal advice.
"""


def build_system_message(user_id: str, date_range: DateRange) -> ConversationMessage:
    """System directive scoped to one user and one date window."""
    return ConversationMessage(
        role="system",
        content=SYSTEM_ROLE.format(
            user_id=user_id,
            tool_name=GET_USER_TRANSACTIONS,
            start=date_range.start.isoformat(),
            end=date_range.end.isoformat(),
        ),
    )


def build_messages(
    user_id: str,
    user_message: str,
    date_range: DateRange,
) -> Tuple[ConversationMessage, ...]:
    """System directive first, then the question exactly as the user wrote it."""
    return (
        build_system_message(user_id, date_range),
        ConversationMessage(role="user", content=user_message),
    )


def build_prompt(
    user_id: str,
    user_message: str,
    date_range: DateRange,
) -> Dict[str, Any]:
    """
    Build the complete prompt for the completion call.

    Returns:
        Dict with messages (OpenAI wire format) and tools
    """
    messages = build_messages(user_id, user_message, date_range)
    return {
        "messages": [message.model_dump() for message in messages],
        "tools": get_tool_schemas(),
    }
