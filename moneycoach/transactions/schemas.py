"""Transaction Pydantic schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Any, Optional
from datetime import date


class TransactionsRequest(BaseModel):
    """Same shape as the get_user_transactions tool arguments."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId", description="Owner of the transactions")
    start_date: Optional[date] = Field(None, alias="startDate", description="Only transactions after this date")
    end_date: Optional[date] = Field(None, alias="endDate", description="Only transactions before this date (default: today)")


class TransactionsResponse(BaseModel):
    """Transaction records exactly as the data source returned them."""
    transactions: List[Dict[str, Any]] = Field(default_factory=list)
