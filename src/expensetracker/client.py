"""HTTP client for the expense tracker API.

Holds the session token explicitly: it is set by ``login`` and cleared by
``logout`` or by any 401/403 answer from the server.
"""

from dataclasses import dataclass
from datetime import datetime
from types import TracebackType
from typing import Any, Self
from uuid import UUID

import httpx
import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class ApiError(Exception):
    """Non-2xx answer from the API."""

    def __init__(self, status_code: int, error_type: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_type = error_type
        self.message = message


class ClientAuthError(ApiError):
    """Not logged in, or the server rejected the credentials or token."""


@dataclass
class ClientSession:
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def clear(self) -> None:
        self.token = None


class ExpenseRecord(BaseModel):
    id: UUID
    owner_id: UUID
    description: str
    amount: float
    date: datetime


class ExpenseSummary(BaseModel):
    """Listed expenses plus the totals shown next to them."""

    expenses: list[ExpenseRecord] = Field(default_factory=list)
    count: int = 0

    @property
    def total(self) -> float:
        return round(sum(expense.amount for expense in self.expenses), 2)


class ExpenseTrackerClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: httpx.Client | None = None,
        session: ClientSession | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)
        self.session = session or ClientSession()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def register(self, username: str, password: str) -> UUID:
        data = self._request("POST", "/api/auth/register", json={"username": username, "password": password})
        return UUID(data["userId"])

    def login(self, username: str, password: str) -> None:
        data = self._request("POST", "/api/auth/login", json={"username": username, "password": password})
        self.session.token = data["token"]

    def logout(self) -> None:
        # Tokens are stateless, forgetting it is all a logout takes
        self.session.clear()

    def list_expenses(self) -> ExpenseSummary:
        data = self._request("GET", "/api/expenses", auth=True)
        return ExpenseSummary(expenses=data["data"], count=data["count"])

    def create_expense(self, description: str, amount: float) -> ExpenseRecord:
        data = self._request("POST", "/api/expenses", json={"description": description, "amount": amount}, auth=True)
        return ExpenseRecord.model_validate(data["data"])

    def delete_expense(self, expense_id: UUID | str) -> ExpenseRecord:
        data = self._request("DELETE", f"/api/expenses/{expense_id}", auth=True)
        return ExpenseRecord.model_validate(data["data"])

    def _request(self, method: str, path: str, *, json: dict[str, Any] | None = None, auth: bool = False) -> Any:
        headers: dict[str, str] = {}
        if auth:
            if self.session.token is None:
                raise ClientAuthError(401, "missing_token", "Not logged in")
            headers["Authorization"] = f"Bearer {self.session.token}"

        response = self._http.request(method, path, json=json, headers=headers)
        if response.is_success:
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        error_type = str(payload.get("type", "http_error"))
        message = str(payload.get("message") or response.reason_phrase)

        if response.status_code in (401, 403):
            logger.debug("session_cleared", status_code=response.status_code, error_type=error_type)
            self.session.clear()
            raise ClientAuthError(response.status_code, error_type, message)
        raise ApiError(response.status_code, error_type, message)
