"""Shared test fixtures for the Money Coach API tests."""
import json
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient
from openai.types.chat import ChatCompletion

from moneycoach.main import app
from moneycoach.coach.dependencies import get_coach_client
from moneycoach.coach.llm_client import CoachLLMClient
from moneycoach.transactions.client import TransactionsClient
from moneycoach.transactions.routes import get_transactions_client


# ============================================================================
# COMPLETION BUILDERS
# ============================================================================

def _completion(message: Dict[str, Any], finish_reason: str, completion_id: str) -> ChatCompletion:
    return ChatCompletion.model_validate({
        "id": completion_id,
        "object": "chat.completion",
        "created": 1735689600,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "finish_reason": finish_reason,
                "message": message,
            }
        ],
    })


@pytest.fixture
def answer_completion() -> Callable[..., ChatCompletion]:
    """Factory for a completion that answers without calling a tool."""
    def build(content: Optional[str] = "Of course! Let's look at your finances together.",
              completion_id: str = "chatcmpl-answer",
              refusal: Optional[str] = None) -> ChatCompletion:
        return _completion(
            {"role": "assistant", "content": content, "refusal": refusal, "tool_calls": None},
            "stop",
            completion_id,
        )
    return build


@pytest.fixture
def tool_call_completion() -> Callable[..., ChatCompletion]:
    """Factory for a completion requesting one or more tool calls."""
    def build(
        arguments: Any = None,
        name: str = "get_user_transactions",
        completion_id: str = "chatcmpl-tool",
        extra_calls: int = 0,
    ) -> ChatCompletion:
        if arguments is None:
            arguments = {"userId": "u1"}
        raw = arguments if isinstance(arguments, str) else json.dumps(arguments)
        calls = [
            {
                "id": f"call_{index + 1}",
                "type": "function",
                "function": {"name": name, "arguments": raw},
            }
            for index in range(1 + extra_calls)
        ]
        return _completion(
            {"role": "assistant", "content": None, "tool_calls": calls},
            "tool_calls",
            completion_id,
        )
    return build


# ============================================================================
# CLIENTS
# ============================================================================

@pytest.fixture
def mock_openai() -> MagicMock:
    """AsyncOpenAI stand-in with an awaitable chat.completions.create."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def upstream_requests() -> List[httpx.Request]:
    """Requests seen by the mock HTTP transport."""
    return []


@pytest.fixture
def upstream_handler() -> Dict[str, Callable[[httpx.Request], httpx.Response]]:
    """Mutable holder for the mock transport's response function."""
    return {"handle": lambda request: httpx.Response(200, json={"status": "completed"})}


@pytest.fixture
def mock_transport(upstream_requests, upstream_handler) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        return upstream_handler["handle"](request)
    return httpx.MockTransport(handler)


@pytest.fixture
def coach_client(mock_openai, mock_transport) -> CoachLLMClient:
    return CoachLLMClient(
        api_key="sk-test",
        model="gpt-4o",
        base_url="https://llm.test/v1",
        tool_outputs_path="/responses/{response_id}/submit_tool_outputs",
        openai_client=mock_openai,
        transport=mock_transport,
    )


@pytest.fixture
def transactions_client(mock_transport) -> TransactionsClient:
    return TransactionsClient(
        base_url="https://bubble.test/api/1.1/obj",
        api_key="bubble-test",
        transport=mock_transport,
    )


@pytest.fixture
def api_client(coach_client, transactions_client):
    """TestClient with the shared upstream clients swapped for mocked ones."""
    app.dependency_overrides[get_coach_client] = lambda: coach_client
    app.dependency_overrides[get_transactions_client] = lambda: transactions_client
    yield TestClient(app)
    app.dependency_overrides.clear()
