from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from expensetracker.core.core import Service
from expensetracker.core.modules.expense.models import Expense
from expensetracker.core.modules.expense.validators import validate_amount, validate_description
from expensetracker.core.modules.token.models import Identity
from expensetracker.errors import NotFoundError

logger = structlog.get_logger(__name__)


class ExpenseService(Service):
    """Owner-scoped expense records. Every query filters on owner_id."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("expenses")

    async def on_start(self) -> None:
        await self._collection.create_index([("owner_id", 1), ("date", -1)])

    async def list_expenses(self, identity: Identity) -> list[Expense]:
        """Get the caller's expenses, most recent first."""
        cursor = self._collection.find({"owner_id": identity.user_id}).sort("date", -1)
        return await Expense.list_cursor(cursor)

    async def create_expense(self, identity: Identity, description: str, amount: float) -> Expense:
        expense = Expense(
            owner_id=identity.user_id,
            description=validate_description(description),
            amount=validate_amount(amount),
        )
        await self._collection.insert_one(expense.to_mongo())
        logger.info("expense_created", expense_id=str(expense.id), user_id=str(identity.user_id))
        return expense

    async def delete_expense(self, identity: Identity, expense_id: UUID) -> Expense:
        """Delete one of the caller's expenses and return it.

        Another user's expense is reported exactly like a missing one.
        """
        document = await self._collection.find_one_and_delete({"_id": expense_id, "owner_id": identity.user_id})
        expense = Expense.from_mongo(document)
        if expense is None:
            raise NotFoundError("Expense not found")
        logger.info("expense_deleted", expense_id=str(expense_id), user_id=str(identity.user_id))
        return expense
