"""Bubble data API client for user transactions.

Transactions are filtered on the provider side through a JSON list of
constraints passed in the query string. Pending and future transactions
are always excluded.
"""
from datetime import date
from typing import Any, Dict, List, Optional
import json
import logging

import httpx

from moneycoach.config import Settings
from moneycoach.coach.dates import utc_today
from moneycoach.errors import UpstreamFailure, describe_http_error


logger = logging.getLogger(__name__)


def build_constraints(
    user_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Bubble search constraints for one user's settled transactions."""
    constraints = [
        {"key": "Created By", "constraint_type": "equals", "value": user_id},
        {"key": "is_pending?", "constraint_type": "equals", "value": "false"},
    ]
    if start_date:
        constraints.append(
            {"key": "Date", "constraint_type": "greater than", "value": start_date.isoformat()}
        )
    upper = end_date or today or utc_today()
    constraints.append(
        {"key": "Date", "constraint_type": "less than", "value": upper.isoformat()}
    )
    return constraints


class TransactionsClient:
    """Bearer-authenticated client for the transactions endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "TransactionsClient":
        return cls(base_url=settings.BUBBLE_API_URL, api_key=settings.BUBBLE_API_KEY)

    async def fetch_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch a user's transactions in the order the provider returns them."""
        if not self.base_url:
            raise UpstreamFailure("Transaction data source is not configured", "BUBBLE_API_URL is not set")

        constraints = build_constraints(user_id, start_date, end_date)
        logger.info(f"Fetching transactions for user {user_id}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/transactions",
                    params={"constraints": json.dumps(constraints)},
                    headers={"Authorization": f"Bearer {self._api_key}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Error fetching transactions for user {user_id}: {e}")
            raise UpstreamFailure("Failed to fetch transactions", str(e)) from e

        if response.is_error:
            details = describe_http_error(response, f"Upstream returned HTTP {response.status_code}")
            logger.error(f"Transaction fetch for user {user_id} rejected ({response.status_code}): {details}")
            raise UpstreamFailure("Failed to fetch transactions", details)

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamFailure("Failed to fetch transactions", f"Invalid JSON from data source: {e}") from e

        if not isinstance(payload, dict):
            envelope = None
        else:
            envelope = payload.get("response") or {}
        if not isinstance(envelope, dict) or not isinstance(envelope.get("results") or [], list):
            logger.error(f"Unexpected transactions payload for user {user_id}: {type(payload).__name__}")
            raise UpstreamFailure("Failed to fetch transactions", "Unexpected payload shape from data source")

        transactions = envelope.get("results") or []
        logger.info(f"Retrieved {len(transactions)} transactions for user {user_id}")
        return transactions
