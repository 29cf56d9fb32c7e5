"""Registration, login and session endpoints."""

import logging

from fastapi import APIRouter, Request, Response, status
from pydantic import Field, model_validator

from sportsync.api.schemas import MessageResponse, UserResponse
from sportsync.auth import AUTH_RESPONSES, VALIDATION_RESPONSE, OptionalUser
from sportsync.core.config import Settings
from sportsync.core.context import Context
from sportsync.core.exceptions import AuthenticationError
from sportsync.core.rate_limit import auth_limit, limiter
from sportsync.core.security import hash_password, verify_password
from sportsync.schemas import EMAIL_PATTERN, CamelModel, UserCreate

logger = logging.getLogger(__name__)

router = APIRouter()


class RegisterRequest(CamelModel):
    """New account details."""

    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    # bcrypt ignores input past 72 bytes
    password: str = Field(..., min_length=6, max_length=72)
    confirm_password: str = Field(..., min_length=6, max_length=72)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(CamelModel):
    """Email/password credentials."""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6, max_length=72)
    remember_me: bool | None = None


def set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=VALIDATION_RESPONSE,
)
@limiter.limit(auth_limit)
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    context: Context,
) -> UserResponse:
    """Create an account and log it in.

    Email is checked for uniqueness before username, both case-insensitively.
    """
    user = await context.storage.create_user(
        UserCreate(
            username=body.username,
            email=body.email,
            password=hash_password(body.password, rounds=context.settings.bcrypt_rounds),
            role="user",
        )
    )
    token = context.sessions.create(user.id)
    set_session_cookie(response, context.settings, token)

    logger.info(f"User {user.id} registered")
    return UserResponse(user=user.to_public())


@router.post("/login", response_model=UserResponse, responses=AUTH_RESPONSES)
@limiter.limit(auth_limit)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    context: Context,
) -> UserResponse:
    """Verify credentials and start a session."""
    user = await context.storage.get_user_by_email(body.email)
    # Same message whether the email is unknown or the password is wrong
    if user is None or not verify_password(body.password, user.password):
        raise AuthenticationError("Invalid email or password")

    # Rotate: a fresh login never reuses the caller's previous token
    context.sessions.destroy(request.cookies.get(context.settings.session_cookie_name))
    token = context.sessions.create(user.id)
    set_session_cookie(response, context.settings, token)

    logger.info(f"User {user.id} logged in")
    return UserResponse(user=user.to_public())


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response, context: Context) -> MessageResponse:
    """End the caller's session. Succeeds even without one."""
    context.sessions.destroy(request.cookies.get(context.settings.session_cookie_name))
    clear_session_cookie(response, context.settings)
    return MessageResponse(message="Successfully logged out")


@router.get("/user", response_model=UserResponse, responses=AUTH_RESPONSES)
async def current_user(user: OptionalUser) -> UserResponse:
    """Return the logged-in user."""
    if user is None:
        raise AuthenticationError("Not authenticated")
    return UserResponse(user=user.to_public())
