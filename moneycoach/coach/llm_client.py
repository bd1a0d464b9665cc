"""LLM conversation service client.

Wraps the two upstream calls the coach makes:
1. Creating a completion with tool calling enabled (OpenAI SDK)
2. Submitting a tool's output for a stored response (raw HTTP)

One instance is built at startup and shared, read-only, by all requests.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import logging

import httpx
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from moneycoach.config import Settings
from moneycoach.errors import UpstreamFailure, describe_http_error


logger = logging.getLogger(__name__)


class CoachLLMClient:
    """Client for the LLM conversation service."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        tool_outputs_path: str,
        openai_client: Optional[AsyncOpenAI] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.tool_outputs_path = tool_outputs_path
        self._openai = openai_client or AsyncOpenAI(api_key=api_key, base_url=self.base_url)
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "CoachLLMClient":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            base_url=settings.OPENAI_BASE_URL,
            tool_outputs_path=settings.OPENAI_TOOL_OUTPUTS_PATH,
        )

    async def close(self) -> None:
        await self._openai.close()

    # ------------------------------------------------------------------
    # Completions
    # ------------------------------------------------------------------

    async def create_completion(
        self,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
    ) -> ChatCompletion:
        """
        Call the LLM with automatic tool selection.

        The exchange is stored upstream so a later tool output submission
        can reference it by the completion id.
        """
        try:
            completion = await self._openai.chat.completions.create(
                model=self.model,
                messages=messages,
                tools=tools,
                tool_choice="auto",
                store=True,
            )
        except Exception as e:
            logger.error(f"LLM completion failed: {e}")
            raise UpstreamFailure("Failed to get a response from the LLM service", str(e)) from e

        logger.info(f"LLM completion {completion.id} received")
        return completion

    # ------------------------------------------------------------------
    # Tool outputs
    # ------------------------------------------------------------------

    def tool_outputs_url(self, response_id: str) -> str:
        path = self.tool_outputs_path.format(response_id=quote(response_id, safe=""))
        return f"{self.base_url}{path}"

    async def submit_tool_outputs(
        self,
        response_id: str,
        tool_outputs: List[Dict[str, Any]],
    ) -> Any:
        """Forward tool outputs for a stored response and return the upstream payload."""
        url = self.tool_outputs_url(response_id)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    url,
                    json={"tool_outputs": tool_outputs},
                    headers={
                        "Authorization": f"Bearer {self._api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            logger.error(f"Tool output submission for {response_id} failed: {e}")
            raise UpstreamFailure("Failed to submit tool output", str(e)) from e

        if response.is_error:
            details = describe_http_error(response, f"Upstream returned HTTP {response.status_code}")
            logger.error(f"Tool output submission for {response_id} rejected ({response.status_code}): {details}")
            raise UpstreamFailure("Failed to submit tool output", details)

        logger.info(f"Tool output for {response_id} accepted")
        try:
            return response.json()
        except ValueError:
            return response.text
