from datetime import datetime

from pydantic import Field

from expensetracker.core.db import MongoModel
from expensetracker.utils import now_ms


class User(MongoModel):
    """Registered account. Indexed on username - unique."""

    username: str
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now_ms)
