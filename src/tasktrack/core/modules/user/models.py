from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from tasktrack.core.db import MongoModel
from tasktrack.core.modules.session.models import SessionIdentity
from tasktrack.utils import now


class User(MongoModel):
    """User domain model with credentials."""

    email: str  # stored lowercased, unique
    name: str
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now)

    def identity(self) -> SessionIdentity:
        """Snapshot copied into new sessions."""
        return SessionIdentity(user_id=self.id, email=self.email, name=self.name)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Display name")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, email=user.email, name=user.name)
