"""Session management models."""

from typing import NewType, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

AuthToken = NewType("AuthToken", str)

SESSION_TTL_SECONDS = 7 * 24 * 60 * 60  # 7 days
SESSION_KEY_PREFIX = "session:"


def session_key(token: str) -> str:
    """Store key for a session token."""
    return f"{SESSION_KEY_PREFIX}{token}"


class SessionIdentity(BaseModel):
    """Identity snapshot copied into a session at creation time."""

    user_id: UUID
    email: str
    name: str


class Session(SessionIdentity):
    """User authentication session.

    Stored as camelCase JSON under ``session:<token>`` with a native TTL.
    Timestamps are epoch milliseconds.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    created_at: int
    expires_at: int

    @model_validator(mode="after")
    def check_window(self) -> Self:
        if self.expires_at <= self.created_at:
            raise ValueError("expiresAt must be later than createdAt")
        return self

    def is_expired(self, now_ms: int) -> bool:
        return now_ms > self.expires_at

    def identity(self) -> SessionIdentity:
        return SessionIdentity(user_id=self.user_id, email=self.email, name=self.name)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str | bytes) -> Self:
        return cls.model_validate_json(raw)


class IssuedSession(BaseModel):
    """Token handed to the client together with its absolute expiry (epoch ms)."""

    token: AuthToken = Field(..., description="Opaque bearer token")
    expires_at: int = Field(..., description="Expiry as epoch milliseconds")
