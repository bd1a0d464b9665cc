"""Money Coach Pydantic schemas for request/response validation."""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Any, Optional, Literal, Union
from datetime import date


# ============================================================================
# CONVERSATION
# ============================================================================

class DateRange(BaseModel):
    """Inclusive window of transaction dates the coach scopes answers to."""
    model_config = ConfigDict(frozen=True)

    start: date = Field(..., description="First day of the window")
    end: date = Field(..., description="Last day of the window")


class ConversationMessage(BaseModel):
    """A single message sent to the LLM."""
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user"] = Field(..., description="Message role")
    content: str = Field(..., description="Message content")


# ============================================================================
# ASSISTANT REQUEST/RESPONSE
# ============================================================================

class AssistantRequest(BaseModel):
    """Question for the coach.

    input and userId are declared optional so that a missing field is
    reported as a 400 by the orchestrator rather than a schema error.
    """
    model_config = ConfigDict(populate_by_name=True)

    input: Optional[str] = Field(None, description="The user's question")
    user_id: Optional[str] = Field(None, alias="userId", description="User the question is about")
    start_date: Optional[date] = Field(None, alias="startDate", description="Window start (YYYY-MM-DD)")
    end_date: Optional[date] = Field(None, alias="endDate", description="Window end (YYYY-MM-DD)")

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.input:
            missing.append("input")
        if not self.user_id:
            missing.append("userId")
        return missing


class AnswerResponse(BaseModel):
    """Final answer, no tool was needed."""
    success: Literal[True] = True
    answer: str = Field(..., description="The coach's answer")


class PendingToolCall(BaseModel):
    """A tool call the caller must execute before the conversation can finish."""
    model_config = ConfigDict(frozen=True)

    response_id: str = Field(..., description="Id of the completion that requested the tool")
    tool_call_id: str = Field(..., description="Id of the call within that completion")
    tool_name: str = Field(..., description="Name of the requested tool")
    tool_arguments: Dict[str, Any] = Field(default_factory=dict, description="Parsed tool arguments")


class ToolRequiredResponse(PendingToolCall):
    """Suspension signal: the caller executes the tool and calls /finalize-tool-output."""
    requires_tool: Literal[True] = True


AssistantResponse = Union[AnswerResponse, ToolRequiredResponse]


# ============================================================================
# TOOL OUTPUT SUBMISSION
# ============================================================================

class ToolOutputSubmission(BaseModel):
    """Tool result for a previously suspended conversation."""
    response_id: Optional[str] = Field(None, description="response_id returned by /assistant")
    tool_call_id: Optional[str] = Field(None, description="tool_call_id returned by /assistant")
    transactions: Optional[List[Any]] = Field(None, description="Transaction records, forwarded verbatim")

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.response_id:
            missing.append("response_id")
        if not self.tool_call_id:
            missing.append("tool_call_id")
        if self.transactions is None:
            missing.append("transactions")
        return missing


class FinalizeResponse(BaseModel):
    """Upstream acknowledgment of a tool output submission."""
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    openai_response: Any = Field(None, alias="openaiResponse", description="Upstream payload, verbatim")


# ============================================================================
# ERRORS
# ============================================================================

class ErrorResponse(BaseModel):
    """Error envelope (documentation only, rendered by the exception handlers)."""
    error: str
    details: Optional[Any] = None
