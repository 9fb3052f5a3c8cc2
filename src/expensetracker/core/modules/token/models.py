"""Session token models."""

from typing import NewType
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

AuthToken = NewType("AuthToken", str)


class Identity(BaseModel):
    """Authenticated caller, as carried inside a verified token."""

    user_id: UUID
    username: str

    model_config = ConfigDict(frozen=True)


class TokenClaims(BaseModel):
    """JWT payload. `iat` and `exp` are NumericDate seconds since the epoch."""

    sub: UUID
    username: str = Field(..., min_length=1)
    iat: float
    exp: float

    model_config = ConfigDict(extra="ignore")

    def to_identity(self) -> Identity:
        return Identity(user_id=self.sub, username=self.username)
