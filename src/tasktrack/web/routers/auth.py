from fastapi import APIRouter, Response

from tasktrack.app import AuthResult, CurrentUser
from tasktrack.config import Config
from tasktrack.core.modules.user.validators import LoginRequest, SignupRequest
from tasktrack.web.deps import AUTH_COOKIE_NAME, AppDep, ConfigDep, CurrentSessionDep
from tasktrack.web.openapi import ErrorResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_auth_cookie(response: Response, result: AuthResult, config: Config) -> None:
    # Set cookie for browser-based clients
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=result.token,
        httponly=True,
        samesite="lax",
        secure=config.cookie_secure,
        max_age=config.session_ttl_seconds,
    )


@router.post(
    "/signup",
    summary="Create account",
    description="Register a new user and open a session for it.",
    operation_id="signup",
    status_code=201,
    response_model_by_alias=True,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Invalid payload"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def signup(signup_data: SignupRequest, app: AppDep, config: ConfigDep, response: Response) -> AuthResult:
    result = await app.signup(signup_data.email, signup_data.password, signup_data.name)
    _set_auth_cookie(response, result, config)
    return result


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive an authentication token.",
    operation_id="login",
    response_model_by_alias=True,
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Invalid payload"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, config: ConfigDep, response: Response) -> AuthResult:
    """Authenticate user and create session."""
    result = await app.login(login_data.email, login_data.password)
    _set_auth_cookie(response, result, config)
    return result


@router.post(
    "/logout",
    summary="End session",
    description="Invalidate the current authentication session.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, current: CurrentSessionDep, response: Response) -> None:
    await app.logout(current.token)
    response.delete_cookie(AUTH_COOKIE_NAME)


@router.get(
    "/me",
    summary="Get current user",
    description="Return the account behind the presented token.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "User no longer exists"},
    },
)
async def get_current_user(app: AppDep, current: CurrentSessionDep) -> CurrentUser:
    return await app.get_current_user(current.session)


@router.post(
    "/refresh",
    summary="Rotate session token",
    description="Issue a fresh token with a full lifetime. The presented token stops working immediately.",
    operation_id="refreshSession",
    response_model_by_alias=True,
    responses={
        200: {"description": "New token issued"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def refresh(app: AppDep, current: CurrentSessionDep, config: ConfigDep, response: Response) -> AuthResult:
    result = await app.refresh(current.token, current.session)
    _set_auth_cookie(response, result, config)
    return result
