"""Opaque session token generation."""

import secrets

from tasktrack.core.modules.session.models import AuthToken

TOKEN_BYTES = 32


def generate_token() -> AuthToken:
    """Return a new random token: 32 bytes from the OS CSPRNG as 64 lowercase hex chars.

    Uniqueness is probabilistic; the store is never consulted.
    """
    return AuthToken(secrets.token_hex(TOKEN_BYTES))
