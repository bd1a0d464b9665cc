"""Tool Call Detector - Classifies a completion as an answer or a tool request.

Only the first tool call of a completion is surfaced. A completion asking
for several tools at once still suspends on the first one; the rest are
logged and dropped.
"""
from dataclasses import dataclass
from typing import Any, Dict, Union
import json
import logging

from openai.types.chat import ChatCompletion
from pydantic import ValidationError

from moneycoach.coach.schemas import PendingToolCall
from moneycoach.coach.tools import get_argument_model
from moneycoach.errors import MalformedToolArguments, UpstreamFailure


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoToolNeeded:
    """The completion carries the final answer."""
    answer: str


@dataclass(frozen=True)
class ToolRequested:
    """The completion asks the caller to run a tool."""
    pending: PendingToolCall


Detection = Union[NoToolNeeded, ToolRequested]


def parse_tool_arguments(tool_name: str, raw_arguments: str) -> Dict[str, Any]:
    """
    Parse a tool call's JSON argument string.

    Arguments of declared tools are validated and normalized through the
    tool's argument model. Anything unparseable raises MalformedToolArguments.
    """
    try:
        args = json.loads(raw_arguments or "{}")
    except (TypeError, json.JSONDecodeError) as e:
        raise MalformedToolArguments(f"Arguments for '{tool_name}' are not valid JSON: {e}") from e

    if not isinstance(args, dict):
        raise MalformedToolArguments(f"Arguments for '{tool_name}' must be a JSON object")

    model = get_argument_model(tool_name)
    if model is None:
        return args

    try:
        return model.model_validate(args).model_dump(by_alias=True)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MalformedToolArguments(f"Invalid arguments for '{tool_name}': {fields}") from e


def detect_tool_call(completion: ChatCompletion) -> Detection:
    """Decide whether a completion answers the question or requests a tool."""
    if not completion.choices:
        raise UpstreamFailure("LLM response contained no choices")

    message = completion.choices[0].message
    tool_calls = message.tool_calls or []

    if tool_calls:
        if len(tool_calls) > 1:
            logger.warning(
                f"Completion {completion.id} requested {len(tool_calls)} tool calls, only the first is used"
            )
        tool_call = tool_calls[0]
        function = getattr(tool_call, "function", None)
        if function is None:
            raise MalformedToolArguments(f"Tool call {tool_call.id} is not a function call")

        return ToolRequested(
            pending=PendingToolCall(
                response_id=completion.id,
                tool_call_id=tool_call.id,
                tool_name=function.name,
                tool_arguments=parse_tool_arguments(function.name, function.arguments),
            )
        )

    # A refusal is the model's answer to the question
    answer = message.content or getattr(message, "refusal", None)
    if not answer:
        raise UpstreamFailure("LLM response contained neither an answer nor a tool call")

    return NoToolNeeded(answer=answer)
