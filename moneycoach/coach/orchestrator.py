"""Money Coach Orchestrator - Two-phase tool call protocol.

answer_question:
1. Validates the request (input and userId are required)
2. Resolves the date window, defaulting to the trailing 12 months
3. Builds the conversation and calls the LLM with tools enabled
4. Returns the answer, or suspends by handing the tool request back to the caller

finalize_tool_output:
1. Validates the submission (response_id, tool_call_id, transactions)
2. Forwards the transactions as the tool output for that response
3. Returns the upstream acknowledgment

Continuity between the two calls is carried entirely by the caller through
response_id and tool_call_id. Nothing is stored here.
"""
from datetime import date
from typing import Optional
import logging

from moneycoach.coach.schemas import (
    AssistantRequest,
    AssistantResponse,
    AnswerResponse,
    ToolRequiredResponse,
    ToolOutputSubmission,
    FinalizeResponse,
)
from moneycoach.coach.dates import resolve_date_range
from moneycoach.coach.prompt_builder import build_prompt
from moneycoach.coach.detector import detect_tool_call, ToolRequested
from moneycoach.coach.llm_client import CoachLLMClient
from moneycoach.errors import InvalidRequest


logger = logging.getLogger(__name__)


async def answer_question(
    client: CoachLLMClient,
    request: AssistantRequest,
    today: Optional[date] = None,
) -> AssistantResponse:
    """Run the first round-trip: answer directly or suspend on a tool call."""
    missing = request.missing_fields()
    if missing:
        raise InvalidRequest.missing(missing)

    logger.info(f"Assistant request for user {request.user_id}")

    date_range = resolve_date_range(request.start_date, request.end_date, today=today)
    prompt = build_prompt(
        user_id=request.user_id,
        user_message=request.input,
        date_range=date_range,
    )

    completion = await client.create_completion(
        messages=prompt["messages"],
        tools=prompt["tools"],
    )

    detection = detect_tool_call(completion)
    if isinstance(detection, ToolRequested):
        pending = detection.pending
        logger.info(
            f"Suspending on tool '{pending.tool_name}' "
            f"(response {pending.response_id}, call {pending.tool_call_id})"
        )
        return ToolRequiredResponse(**pending.model_dump())

    return AnswerResponse(answer=detection.answer)


async def finalize_tool_output(
    client: CoachLLMClient,
    submission: ToolOutputSubmission,
) -> FinalizeResponse:
    """Run the second round-trip: resume a suspended conversation with the tool's output."""
    missing = submission.missing_fields()
    if missing:
        raise InvalidRequest.missing(missing)

    logger.info(
        f"Submitting {len(submission.transactions)} transactions "
        f"for response {submission.response_id}, call {submission.tool_call_id}"
    )

    upstream = await client.submit_tool_outputs(
        response_id=submission.response_id,
        tool_outputs=[
            {
                "tool_call_id": submission.tool_call_id,
                "output": {"transactions": submission.transactions},
            }
        ],
    )

    return FinalizeResponse(openai_response=upstream)
