from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from tasktrack.core.core import Service
from tasktrack.core.modules.user.models import User
from tasktrack.errors import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class UserService(Service):
    """Manages user accounts stored in MongoDB.

    Lookups always hit the database; sessions carry their own identity
    snapshot so reads on the request path do not come through here.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__()
        self._collection = database.get_collection("users")

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID."""
        user = User.from_mongo(await self._collection.find_one({"_id": user_id}))
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        return User.from_mongo(await self._collection.find_one({"email": email.lower()}))

    async def create_user(self, email: str, password: str, name: str) -> User:
        """Create user with hashed password."""
        email = email.lower()
        if await self.get_user_by_email(email) is not None:
            raise ConflictError("Email already registered")

        user = User(email=email, name=name, password_hash=hash_password(password))
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError:
            raise ConflictError("Email already registered") from None
        logger.info("user_created", user_id=str(user.id))
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user if the credentials match, otherwise None."""
        user = await self.get_user_by_email(email)
        if user is None or not check_password(password, user.password_hash):
            logger.info("login_failed")
            return None
        return user

    async def on_start(self) -> None:
        """Initialize indexes."""
        await self._collection.create_index([("email", 1)], unique=True)
        logger.debug("user_service_started")
