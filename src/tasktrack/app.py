from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from pydantic import BaseModel, Field

from tasktrack.config import Config
from tasktrack.core.core import Core
from tasktrack.core.modules.session.models import AuthToken, IssuedSession, Session
from tasktrack.core.modules.user.models import User, UserView
from tasktrack.errors import AuthenticationError


class AuthResult(BaseModel):
    """User plus the session token issued for them."""

    user: UserView
    token: str = Field(..., description="Bearer token for subsequent requests")
    expires_at: int = Field(..., serialization_alias="expiresAt", description="Token expiry as epoch milliseconds")

    @classmethod
    def build(cls, user: UserView, issued: IssuedSession) -> "AuthResult":
        return cls(user=user, token=issued.token, expires_at=issued.expires_at)


class CurrentUser(BaseModel):
    """Account behind the presented token."""

    user: UserView


class App:
    """Facade for all application operations used by the web layer."""

    def __init__(self, config: Config, core: Core | None = None) -> None:
        self._core = core if core is not None else Core(config)

    @property
    def core(self) -> Core:
        return self._core

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def authenticate(self, auth_token: AuthToken) -> Session | None:
        """Resolve a token to its live session, or None."""
        return await self._core.services.session.get_session(auth_token)

    async def signup(self, email: str, password: str, name: str) -> AuthResult:
        """Create an account and log it in."""
        user = await self._core.services.user.create_user(email, password, name)
        return await self._open_session(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate user and create session."""
        user = await self._core.services.user.authenticate(email, password)
        if user is None:
            raise AuthenticationError("Invalid email or password")
        return await self._open_session(user)

    async def logout(self, auth_token: AuthToken) -> None:
        """Invalidate user session."""
        await self._core.services.session.delete_session(auth_token)

    async def refresh(self, auth_token: AuthToken, session: Session) -> AuthResult:
        """Rotate the session token; the old token stops working immediately.

        ``session`` is the record the token already resolved to for this request.
        """
        issued = await self._core.services.session.refresh_session(auth_token)
        if issued is None:
            # Revoked or expired between the two reads
            raise AuthenticationError
        user = UserView(id=session.user_id, email=session.email, name=session.name)
        return AuthResult.build(user, issued)

    async def get_current_user(self, session: Session) -> CurrentUser:
        """Load the live user record behind a session."""
        user = await self._core.services.user.get_user(session.user_id)
        return CurrentUser(user=UserView.from_domain(user))

    async def _open_session(self, user: User) -> AuthResult:
        issued = await self._core.services.session.create_session(user.identity())
        return AuthResult.build(UserView.from_domain(user), issued)
