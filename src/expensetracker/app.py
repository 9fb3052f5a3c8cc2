from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from expensetracker.config import Config
from expensetracker.core.core import Core
from expensetracker.core.db import parse_id
from expensetracker.core.modules.expense.models import Expense
from expensetracker.core.modules.token.models import AuthToken
from expensetracker.core.modules.user.models import User


class App:
    """Facade for all application operations, authenticates callers before delegating to Core."""

    def __init__(self, config: Config, core: Core | None = None) -> None:
        self._core = core or Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    @property
    def debug(self) -> bool:
        return self._core.config.debug

    async def register(self, username: str, password: str) -> User:
        """Create a new account."""
        return await self._core.services.user.create_user(username, password)

    async def login(self, username: str, password: str) -> AuthToken:
        """Check credentials and issue a session token."""
        user = await self._core.services.user.authenticate(username, password)
        return await self._core.services.token.issue_token(user)

    async def get_expenses(self, auth_token: AuthToken | None) -> list[Expense]:
        """Get the caller's expenses, newest first."""
        identity = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.expense.list_expenses(identity)

    async def create_expense(self, auth_token: AuthToken | None, description: str, amount: float) -> Expense:
        identity = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.expense.create_expense(identity, description, amount)

    async def delete_expense(self, auth_token: AuthToken | None, expense_id: str) -> Expense:
        """Delete one of the caller's expenses by its id string."""
        identity = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.expense.delete_expense(identity, parse_id(expense_id, "expense"))
