from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor

from expensetracker.errors import InvalidIdError


class MongoModel(BaseModel):
    """Base for stored documents; `id` is kept as `_id` in MongoDB and exposed as `id` in JSON."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        data = self.model_dump()
        data["_id"] = data.pop("id")
        return data

    @classmethod
    def from_mongo(cls, document: dict[str, Any] | None) -> Self | None:
        return None if document is None else cls.model_validate(document)

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


def parse_id(value: str, kind: str = "document") -> UUID:
    """Parse a document id received from a client, raising InvalidIdError if malformed."""
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise InvalidIdError(f"Invalid {kind} ID format") from None
