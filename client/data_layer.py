# client/data_layer.py
"""
Network layer of the finance tracker client.

Every call is wrapped so a failure never escapes: it is logged and turned
into the single banner ``message``. After any create/update/delete the full
transaction list is fetched again instead of patching local state.
"""
import asyncio
import logging
import os
from typing import Optional

import aiohttp

from client.views import compute_totals

logger = logging.getLogger(__name__)

API_URL = os.getenv("FINANCE_API_URL", "http://localhost:5000/api")


class RequestFailed(Exception):
    pass


# anything in here becomes a banner message instead of propagating
_FAILURES = (aiohttp.ClientError, asyncio.TimeoutError, RequestFailed, ValueError)


class FinanceClient:
    def __init__(self, base_url: str = API_URL, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

        self.transactions: list = []
        self.income = 0.0
        self.expenses = 0.0
        self.balance = 0.0
        self.message = ""
        self.insight_text = ""
        self.goal_text = ""
        self.is_loading_insight = False
        self.is_loading_goal = False

    async def __aenter__(self):
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self):
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _request(self, method: str, path: str, failure: str, payload=None):
        async with self.session.request(method, f"{self.base_url}{path}", json=payload) as resp:
            if not resp.ok:
                raise RequestFailed(f"{failure} ({resp.status})")
            return await resp.json()

    def _set_transactions(self, data: list):
        self.transactions = data
        totals = compute_totals(data)
        self.income = totals.income
        self.expenses = totals.expenses
        self.balance = totals.balance

    async def fetch_transactions(self) -> bool:
        try:
            data = await self._request("GET", "/transactions", "Failed to fetch transactions")
        except _FAILURES as e:
            logger.error("Error fetching transactions: %s", e)
            self.message = "Failed to load transactions. Please check the backend server."
            return False
        self._set_transactions(data)
        return True

    async def add_transaction(self, transaction: dict) -> bool:
        try:
            await self._request("POST", "/transactions", "Failed to add transaction", transaction)
        except _FAILURES as e:
            logger.error("Error adding transaction: %s", e)
            self.message = "Failed to add transaction. Please try again."
            return False
        await self.fetch_transactions()
        return True

    async def update_transaction(self, transaction: dict) -> bool:
        try:
            if not transaction.get("id"):
                raise RequestFailed("Failed to update transaction (no id)")
            await self._request(
                "PUT", f"/transactions/{transaction['id']}", "Failed to update transaction", transaction
            )
        except _FAILURES as e:
            logger.error("Error updating transaction: %s", e)
            self.message = "Failed to update transaction. Please try again."
            return False
        await self.fetch_transactions()
        return True

    async def delete_transaction(self, transaction_id: str) -> bool:
        try:
            await self._request("DELETE", f"/transactions/{transaction_id}", "Failed to delete transaction")
        except _FAILURES as e:
            logger.error("Error deleting transaction: %s", e)
            self.message = "Failed to delete transaction. Please try again."
            return False
        await self.fetch_transactions()
        return True

    async def get_financial_insights(self) -> bool:
        # the dashboard disables this while loading or with nothing to analyse
        if self.is_loading_insight or not self.transactions:
            return False
        self.is_loading_insight = True
        self.insight_text = ""
        try:
            data = await self._request(
                "POST", "/llm/insights", "Failed to get insights from backend",
                {"transactions": self.transactions},
            )
            self.insight_text = data.get("text") or ""
            return True
        except _FAILURES as e:
            logger.error("Error getting insights: %s", e)
            self.message = "Failed to generate insights. Please check the backend connection."
            return False
        finally:
            self.is_loading_insight = False

    async def get_financial_goals(self) -> bool:
        if self.is_loading_goal:
            return False
        self.is_loading_goal = True
        self.goal_text = ""
        try:
            data = await self._request(
                "POST", "/llm/goals", "Failed to get goal from backend",
                {"income": self.income, "expenses": self.expenses},
            )
            self.goal_text = data.get("text") or ""
            return True
        except _FAILURES as e:
            logger.error("Error getting goal: %s", e)
            self.message = "Failed to generate a financial goal. Please check the backend connection."
            return False
        finally:
            self.is_loading_goal = False
