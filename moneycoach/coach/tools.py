"""Money Coach Tools - OpenAI function calling definitions.

The server only declares tools. Execution happens on the caller's side:
a requested call is handed back by POST /assistant and its output comes in
through POST /finalize-tool-output.
"""
from typing import Dict, Any, List, Optional, Type
from pydantic import BaseModel, ConfigDict, Field


GET_USER_TRANSACTIONS = "get_user_transactions"


# ============================================================================
# TOOL SCHEMAS FOR OPENAI
# ============================================================================

TOOL_SCHEMAS = [
    {
        "type": "function",
        "function": {
            "name": GET_USER_TRANSACTIONS,
            "description": "Fetch a user's transactions for analysis. Use this whenever the question is about the user's spending, income, balances or any specific transactions.",
            "parameters": {
                "type": "object",
                "properties": {
                    "userId": {
                        "type": "string",
                        "description": "The user ID whose transactions we need to fetch"
                    },
                    "startDate": {
                        "type": ["string", "null"],
                        "description": "Earliest transaction date to include (YYYY-MM-DD)"
                    },
                    "endDate": {
                        "type": ["string", "null"],
                        "description": "Latest transaction date to include (YYYY-MM-DD)"
                    }
                },
                "required": ["userId"]
            }
        }
    },
]


def get_tool_schemas() -> List[Dict[str, Any]]:
    """Get the tool schemas for OpenAI function calling."""
    return TOOL_SCHEMAS


# ============================================================================
# TOOL ARGUMENTS
# ============================================================================

class TransactionToolArguments(BaseModel):
    """Arguments of get_user_transactions. Null and absent dates are the same."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(..., alias="userId", min_length=1)
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")


TOOL_ARGUMENT_MODELS: Dict[str, Type[BaseModel]] = {
    GET_USER_TRANSACTIONS: TransactionToolArguments,
}


def get_argument_model(tool_name: str) -> Optional[Type[BaseModel]]:
    """Argument model for a declared tool, None for tools we don't know."""
    return TOOL_ARGUMENT_MODELS.get(tool_name)
