"""
Authentication endpoints.

Sign-up, sign-in with JWT bearer tokens, the current-user lookup, email
verification and password reset. Sign-out is stateless: clients drop their
token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.database.base import utc_now
from careerconnect.core.database.entities import PasswordResetToken, Profile, User, VerificationToken
from careerconnect.core.database.repositories import ProfileRepository, TokenRepository, UserRepository
from careerconnect.core.errors import EmailDeliveryError
from careerconnect.core.logging_config import get_logger
from careerconnect.core.models.domain import UserRole
from careerconnect.core.models.io.auth import (
    MeResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    TokenResponse,
    UserRead,
    VerifyEmailRequest,
)
from careerconnect.core.models.io.profiles import ProfileRead
from careerconnect.integrations import EmailClient, password_reset_email, verification_email
from careerconnect.server.auth import create_access_token, get_current_user, hash_password, verify_password
from careerconnect.server.auth.tokens import (
    generate_password_reset_token,
    generate_verification_token,
    get_password_reset_token,
    get_verification_token,
)
from careerconnect.server.core.config import settings
from careerconnect.server.services.deps import get_email_client

router = APIRouter(tags=["auth"])
logger = get_logger(__name__)

SIGN_UP_ROLES = {"recruiter": UserRole.RECRUITER, "job_seeker": UserRole.APPLICANT}


def _user_read(user: User) -> UserRead:
    return UserRead(id=user.id, email=user.email, name=user.name, role=user.role.value)


async def _send(email_client: EmailClient, to: str, subject: str, html: str) -> None:
    try:
        await email_client.send(to, subject, html)
    except EmailDeliveryError as e:
        logger.error(f"Failed to send '{subject}' to {to}: {e}")


@router.post(
    "/sign-up",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign Up",
    description="Create an account with an empty profile and send an email verification link.",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Missing fields or invalid role"},
        409: {"description": "Email already registered"},
    },
)
async def sign_up(
    payload: SignUpRequest,
    session: AsyncSession = Depends(get_session),
    email_client: EmailClient = Depends(get_email_client),
) -> SignUpResponse:
    """
    Register a new account.

    - **role**: ``recruiter`` or ``job_seeker``.
    """
    if not payload.email or not payload.password or not payload.role:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")
    role = SIGN_UP_ROLES.get(payload.role.lower())
    if role is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role")

    users = UserRepository(session)
    email = payload.email.strip().lower()
    if await users.get_by_email(email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

    user = User(email=email, name=payload.name, password_hash=hash_password(payload.password), role=role)
    try:
        await users.stage(user)
        await ProfileRepository(session).stage(Profile(user_id=user.id, full_name=payload.name))
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    await session.refresh(user)
    logger.info(f"User {user.id} signed up as {role.value}")

    token = await generate_verification_token(session, email)
    config = settings.integrations
    link = f"{config.app_url}/auth/new-verification?token={token.token}"
    await _send(
        email_client,
        email,
        "Confirm your email",
        verification_email(link, expire_hours=settings.auth.token_expire_hours),
    )
    return SignUpResponse(user=_user_read(user))


@router.post(
    "/sign-in",
    response_model=TokenResponse,
    summary="Sign In",
    description="Exchange email and password for a bearer access token.",
    responses={
        400: {"description": "Missing fields"},
        401: {"description": "Invalid credentials"},
    },
)
async def sign_in(payload: SignInRequest, session: AsyncSession = Depends(get_session)) -> TokenResponse:
    if not payload.email or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")
    user = await UserRepository(session).get_by_email(payload.email.strip().lower())
    if user is None or not user.password_hash or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token(str(user.id), user.role.value)
    return TokenResponse(access_token=token, user=_user_read(user))


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Current User",
    description="Return the authenticated user with their profile.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def me(user: User = Depends(get_current_user), session: AsyncSession = Depends(get_session)) -> MeResponse:
    profile = await ProfileRepository(session).get_by_user(user.id)
    return MeResponse(
        user=_user_read(user),
        profile=ProfileRead.model_validate(profile) if profile is not None else None,
    )


@router.post("/sign-out", summary="Sign Out", description="Stateless sign-out; the client discards its token.")
async def sign_out():
    return {"success": True}


@router.post(
    "/verify-email",
    summary="Verify Email",
    description="Consume an email verification token.",
    responses={400: {"description": "Missing, unknown or expired token"}},
)
async def verify_email(payload: VerifyEmailRequest, session: AsyncSession = Depends(get_session)):
    if not payload.token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token is required")
    token = await get_verification_token(session, payload.token)
    if token is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired token")
    user = await UserRepository(session).get_by_email(token.email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email does not exist")

    try:
        user.email_verified = utc_now()
        session.add(user)
        await TokenRepository(session, VerificationToken).consume(token)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    return {"success": True, "message": "Email verified"}


@router.post(
    "/password-reset/request",
    summary="Request Password Reset",
    description="Send a password reset link. The response is the same whether or not the email exists.",
)
async def request_password_reset(
    payload: PasswordResetRequest,
    session: AsyncSession = Depends(get_session),
    email_client: EmailClient = Depends(get_email_client),
):
    message = "If the email exists, a reset link has been sent"
    if not payload.email:
        return {"success": True, "message": message}
    email = payload.email.strip().lower()
    if await UserRepository(session).get_by_email(email) is None:
        logger.info("Password reset requested for an unknown email")
        return {"success": True, "message": message}

    token = await generate_password_reset_token(session, email)
    link = f"{settings.integrations.app_url}/auth/new-password?token={token.token}"
    await _send(
        email_client,
        email,
        "Reset your password",
        password_reset_email(link, expire_hours=settings.auth.token_expire_hours),
    )
    return {"success": True, "message": message}


@router.post(
    "/password-reset/confirm",
    summary="Confirm Password Reset",
    description="Set a new password using a reset token.",
    responses={400: {"description": "Missing, unknown or expired token"}},
)
async def confirm_password_reset(payload: PasswordResetConfirm, session: AsyncSession = Depends(get_session)):
    if not payload.token or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token and password are required")
    token = await get_password_reset_token(session, payload.token)
    if token is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired token")
    user = await UserRepository(session).get_by_email(token.email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email does not exist")

    try:
        user.password_hash = hash_password(payload.password)
        session.add(user)
        await TokenRepository(session, PasswordResetToken).consume(token)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    return {"success": True, "message": "Password updated"}
