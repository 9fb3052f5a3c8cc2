import asyncio
from typing import Any

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from expensetracker.core.core import Service
from expensetracker.core.modules.user.models import User
from expensetracker.core.modules.user.validators import MAX_PASSWORD_BYTES, validate_credentials, validate_new_password
from expensetracker.errors import DuplicateUsernameError, InvalidCredentialsError, NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Credential store: registers users and checks their passwords."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        await self._collection.create_index([("username", 1)], unique=True)

    async def get_user_by_username(self, username: str) -> User:
        user = User.from_mongo(await self._collection.find_one({"username": username}))
        if user is None:
            raise NotFoundError(f"User '{username}' not found")
        return user

    async def has_username(self, username: str) -> bool:
        return await self._collection.find_one({"username": username}) is not None

    async def create_user(self, username: str, password: str) -> User:
        """Create user with a bcrypt hash of the password."""
        validate_credentials(username, password)
        validate_new_password(password)
        if await self.has_username(username):
            raise DuplicateUsernameError(username)

        password_hash = await asyncio.to_thread(self._hash_password, password)
        user = User(username=username, password_hash=password_hash)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError:
            # Lost a race against a concurrent registration
            raise DuplicateUsernameError(username) from None

        logger.info("user_registered", user_id=str(user.id))
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """Return the user if the password matches, raising NotFoundError or InvalidCredentialsError otherwise."""
        validate_credentials(username, password)
        user = await self.get_user_by_username(username)
        if not await asyncio.to_thread(self._check_password, password, user.password_hash):
            logger.info("login_failed", user_id=str(user.id))
            raise InvalidCredentialsError
        return user

    def _hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.core.config.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _check_password(password: str, password_hash: str) -> bool:
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > MAX_PASSWORD_BYTES:
            return False
        # checkpw compares digests in constant time
        return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))
