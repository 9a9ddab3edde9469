from collections.abc import Callable

import structlog

from tasktrack.core.core import Service
from tasktrack.core.modules.session.models import (
    SESSION_TTL_SECONDS,
    AuthToken,
    IssuedSession,
    Session,
    SessionIdentity,
    session_key,
)
from tasktrack.core.modules.session.store import SessionStore
from tasktrack.core.modules.session.tokens import generate_token
from tasktrack.utils import now_ms

logger = structlog.get_logger(__name__)


def _token_hint(token: str) -> str:
    return token[:8]


class SessionService(Service):
    """Creates, reads, rotates and revokes sessions held in a ``SessionStore``.

    Expiry is enforced twice: as the store's native TTL and as an explicit
    ``expires_at`` check on every read, so an expired record is never handed
    back even if the backend has not evicted it yet.

    Nothing here is locked. Two concurrent refreshes of one token may both
    succeed and leave two live sessions; the second delete is a no-op.
    """

    def __init__(
        self,
        store: SessionStore,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        super().__init__()
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    async def create_session(self, identity: SessionIdentity) -> IssuedSession:
        token = generate_token()
        created_at = self._clock()
        session = Session(
            user_id=identity.user_id,
            email=identity.email,
            name=identity.name,
            created_at=created_at,
            expires_at=created_at + self._ttl_seconds * 1000,
        )
        await self._store.put(session_key(token), session.to_json(), self._ttl_seconds)
        logger.debug("session_created", user_id=str(identity.user_id), token=_token_hint(token))
        return IssuedSession(token=token, expires_at=session.expires_at)

    async def get_session(self, token: AuthToken) -> Session | None:
        """Return the live session for ``token``, or None if it is unknown or expired."""
        key = session_key(token)
        raw = await self._store.get(key)
        if raw is None:
            return None

        session = Session.from_json(raw)
        if session.is_expired(self._clock()):
            await self._store.delete(key)
            logger.debug("session_expired_purged", user_id=str(session.user_id), token=_token_hint(token))
            return None
        return session

    async def delete_session(self, token: AuthToken) -> None:
        """Revoke a session. Unknown tokens are ignored."""
        await self._store.delete(session_key(token))
        logger.debug("session_deleted", token=_token_hint(token))

    async def refresh_session(self, token: AuthToken) -> IssuedSession | None:
        """Rotate ``token``: revoke it, then issue a fresh session for the same identity.

        Returns None without touching the store when the token is not live. The
        delete and the create are separate writes; a failure between them leaves
        the old token revoked with no replacement.
        """
        session = await self.get_session(token)
        if session is None:
            return None

        await self._store.delete(session_key(token))
        issued = await self.create_session(session.identity())
        logger.info("session_refreshed", user_id=str(session.user_id), token=_token_hint(issued.token))
        return issued
