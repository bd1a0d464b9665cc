"""Transaction API Routes.

Endpoints:
- POST /transactions - Fetch a user's settled transactions

The request body matches the get_user_transactions tool arguments, so a
caller holding a suspended tool call can post tool_arguments here and send
the result to /finalize-tool-output.
"""
from fastapi import APIRouter, Depends, Request

from moneycoach.errors import InvalidRequest
from moneycoach.transactions import schemas
from moneycoach.transactions.client import TransactionsClient


router = APIRouter()


def get_transactions_client(request: Request) -> TransactionsClient:
    """The process-wide transactions client built at startup."""
    return request.app.state.transactions_client


@router.post("/transactions", response_model=schemas.TransactionsResponse)
async def fetch_transactions(
    request: schemas.TransactionsRequest,
    client: TransactionsClient = Depends(get_transactions_client),
):
    """
    Fetch past, settled transactions for a user.

    Optional startDate/endDate narrow the window; without endDate only
    transactions dated before today are returned.
    """
    if not request.user_id:
        raise InvalidRequest.missing(["userId"])

    transactions = await client.fetch_transactions(
        user_id=request.user_id,
        start_date=request.start_date,
        end_date=request.end_date,
    )
    return schemas.TransactionsResponse(transactions=transactions)
