from dataclasses import dataclass
from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from tasktrack.app import App
from tasktrack.config import Config
from tasktrack.core.modules.session.models import AuthToken, Session
from tasktrack.errors import AuthenticationError

AUTH_COOKIE_NAME = "auth_token"

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False, scheme_name="BearerAuth")
cookie_scheme = APIKeyCookie(name=AUTH_COOKIE_NAME, auto_error=False, scheme_name="AuthTokenCookie")


@dataclass(frozen=True, slots=True)
class CurrentSession:
    """Token presented with the request and the live session it resolved to."""

    token: AuthToken
    session: Session


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


def extract_auth_token(
    credentials: HTTPAuthorizationCredentials | None,
    token_cookie: str | None,
) -> AuthToken | None:
    """Pick the token from the Bearer header, falling back to the cookie."""
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return AuthToken(credentials.credentials)
    if token_cookie:
        return AuthToken(token_cookie)
    return None


async def get_current_session(
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> CurrentSession:
    """Resolve the request's token to a live session or reject with 401."""
    auth_token = extract_auth_token(credentials, token_cookie)
    if auth_token is None:
        raise AuthenticationError("Authentication required")

    session = await app.authenticate(auth_token)
    if session is None:
        raise AuthenticationError
    return CurrentSession(token=auth_token, session=session)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
CurrentSessionDep = Annotated[CurrentSession, Depends(get_current_session)]
