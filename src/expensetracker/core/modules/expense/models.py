from datetime import datetime
from uuid import UUID

from pydantic import Field

from expensetracker.core.db import MongoModel
from expensetracker.utils import now_ms


class Expense(MongoModel):
    """A single spending record, visible only to its owner.

    Indexed on (owner_id, date desc).
    """

    owner_id: UUID
    description: str
    amount: float
    date: datetime = Field(default_factory=now_ms)
