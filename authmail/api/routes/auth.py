"""Authentication API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from authmail.auth.exceptions import (
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from authmail.exceptions import EmailDispatchError, EmailNotVerifiedError, InvalidOrExpiredTokenError
from authmail.schemas.auth import (
    ConfirmEmailRequest,
    PasswordResetConfirm,
    PasswordResetRequest,
    RefreshTokenRequest,
    RegistrationResponse,
    ResendConfirmationRequest,
    TokenPair,
    UserCreate,
    UserLogin,
)
from authmail.services.gateway import EmailAuthGateway


router = APIRouter(tags=["auth"])

_GENERIC_SENT_MESSAGE = "If an account exists for this email, a message has been sent."


def get_gateway(request: Request) -> EmailAuthGateway:
    """Return the gateway attached to the application state."""

    return request.app.state.auth_gateway


@router.post("/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: UserCreate,
    gateway: EmailAuthGateway = Depends(get_gateway),
) -> RegistrationResponse:
    """Register a new user and send a confirmation email."""

    try:
        result = await gateway.register(payload)
    except UserAlreadyExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An account with this email already exists.",
        ) from exc

    return RegistrationResponse(
        id=result.user.id,
        email=result.user.email,
        email_verified=result.user.email_verified,
        email_sent=result.email_sent,
    )


@router.post("/login", response_model=TokenPair)
async def login_user(
    payload: UserLogin,
    gateway: EmailAuthGateway = Depends(get_gateway),
) -> TokenPair:
    """Authenticate a confirmed user and return access and refresh tokens."""

    try:
        return await gateway.login(payload)
    except (UserNotFoundError, InvalidCredentialsError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        ) from exc
    except EmailNotVerifiedError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Email address must be confirmed before logging in.",
        ) from exc


@router.post("/refresh", response_model=TokenPair)
async def refresh_tokens(
    payload: RefreshTokenRequest,
    gateway: EmailAuthGateway = Depends(get_gateway),
) -> TokenPair:
    """Rotate a refresh token."""

    try:
        return await gateway.refresh_tokens(payload.refresh_token)
    except InvalidRefreshTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token.",
        ) from exc


@router.post("/resend-confirmation", status_code=status.HTTP_202_ACCEPTED)
async def resend_confirmation_email(
    payload: ResendConfirmationRequest,
    gateway: EmailAuthGateway = Depends(get_gateway),
) -> dict[str, str]:
    """Issue a new confirmation token and re-send the email."""

    user = await gateway.repo.get_user(payload.email)
    if user is None:
        # Avoid leaking account existence information.
        return {"message": _GENERIC_SENT_MESSAGE}

    if user.email_verified:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Account is already confirmed.",
        )

    try:
        await gateway.send_confirmation_email(user.email)
    except EmailDispatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to send the confirmation email. Please try again later.",
        ) from exc
    return {"message": "Confirmation email resent."}


@router.post("/confirm")
async def confirm_email(
    payload: ConfirmEmailRequest,
    gateway: EmailAuthGateway = Depends(get_gateway),
) -> dict[str, str]:
    """Validate a confirmation token and mark the email as verified."""

    try:
        await gateway.confirm_email(payload.email, payload.token)
    except InvalidOrExpiredTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Confirmation link is invalid or has expired.",
        ) from exc
    return {"message": "Email confirmed."}


@router.post("/password-reset", status_code=status.HTTP_202_ACCEPTED)
async def request_password_reset(
    payload: PasswordResetRequest,
    gateway: EmailAuthGateway = Depends(get_gateway),
) -> dict[str, str]:
    """Send a password reset link when the account exists."""

    user = await gateway.repo.get_user(payload.email)
    if user is None:
        return {"message": _GENERIC_SENT_MESSAGE}

    try:
        await gateway.send_password_reset_email(user.email)
    except EmailDispatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to send the password reset email. Please try again later.",
        ) from exc
    return {"message": _GENERIC_SENT_MESSAGE}


@router.post("/password-reset/confirm")
async def confirm_password_reset(
    payload: PasswordResetConfirm,
    gateway: EmailAuthGateway = Depends(get_gateway),
) -> dict[str, str]:
    """Set a new password using a reset token."""

    try:
        await gateway.confirm_password_reset(payload.email, payload.token, payload.password)
    except InvalidOrExpiredTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Reset link is invalid or has expired.",
        ) from exc
    return {"message": "Password updated."}


__all__ = ["get_gateway", "router"]
