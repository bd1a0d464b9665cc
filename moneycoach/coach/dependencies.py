"""FastAPI dependencies for the coach routes."""
from fastapi import Request

from moneycoach.coach.llm_client import CoachLLMClient


def get_coach_client(request: Request) -> CoachLLMClient:
    """The process-wide LLM client built at startup."""
    return request.app.state.coach_client
