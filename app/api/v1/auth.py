"""
Account endpoints: signup and login.
Both mint a session and hand it back as an httpOnly cookie.
"""

from fastapi import APIRouter, Body, Response

from app.auth.dependencies import SessionToken, set_session_cookie
from app.auth.sessions import get_user_by_session_id
from app.core.exceptions import SessionExpiredException, ValidationException
from app.dependencies import DbSession
from app.schemas.error import ErrorResponse
from app.schemas.user import LoginRequest, SignupRequest, UserResponse
from app.services.user_service import UserService

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.post("/signup", response_model=UserResponse)
async def signup(
    response: Response,
    db: DbSession,
    data: SignupRequest,
):
    """
    Create an account and log it in.

    Returns 400 naming the field when the username or email is taken.
    """
    service = UserService(db)
    user, session = await service.register(data)

    set_session_cookie(response, session)
    return user


@router.post("/login", response_model=UserResponse)
async def login(
    response: Response,
    db: DbSession,
    session_id: SessionToken,
    data: LoginRequest | None = Body(default=None),
):
    """
    Log in with email and password, or confirm an existing session.

    - email + password: 404 unknown user, 401 wrong password, else a new
      session cookie.
    - no credentials: the session cookie is resolved instead; 400 if it
      no longer maps to a user.
    """
    if data is not None and data.has_credentials():
        service = UserService(db)
        user, session = await service.authenticate(data.email, data.password)
        set_session_cookie(response, session)
        return user

    if not session_id:
        raise ValidationException("No username and password or session provided")

    user = await get_user_by_session_id(db, session_id)
    if user is None:
        raise SessionExpiredException()

    return user
