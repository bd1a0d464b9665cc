"""Money Coach API Routes.

Endpoints:
- POST /assistant - Ask a question (answer, or a tool request to execute)
- POST /finalize-tool-output - Submit the tool's output for a suspended question
"""
from fastapi import APIRouter, Depends

from moneycoach.coach import schemas, orchestrator
from moneycoach.coach.dependencies import get_coach_client
from moneycoach.coach.llm_client import CoachLLMClient


router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse, "description": "Missing required field"},
    500: {"model": schemas.ErrorResponse, "description": "Upstream failure"},
}


@router.post("/assistant", response_model=schemas.AssistantResponse, responses=ERROR_RESPONSES)
async def ask_assistant(
    request: schemas.AssistantRequest,
    client: CoachLLMClient = Depends(get_coach_client),
):
    """
    Ask the money coach a question.

    Returns either:
    - {"success": true, "answer": ...} when no transaction data was needed
    - {"requires_tool": true, "response_id", "tool_call_id", "tool_name", "tool_arguments"}
      when the coach needs a tool run. Execute it (for get_user_transactions,
      POST the arguments to /transactions) and send the result to
      /finalize-tool-output with the same response_id and tool_call_id.
    """
    return await orchestrator.answer_question(client, request)


@router.post("/finalize-tool-output", response_model=schemas.FinalizeResponse, responses=ERROR_RESPONSES)
async def finalize_tool_output(
    submission: schemas.ToolOutputSubmission,
    client: CoachLLMClient = Depends(get_coach_client),
):
    """
    Submit a tool's output for a conversation suspended by /assistant.
    """
    return await orchestrator.finalize_tool_output(client, submission)
