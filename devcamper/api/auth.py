import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Annotated, Optional

from fastapi import APIRouter, Cookie, Depends, Query, Request
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordBearer
from pydantic import EmailStr
from sqlalchemy.orm import Session
from starlette import status

from devcamper.config import (
    ENVIRONMENT,
    JWT_COOKIE_EXPIRE_DAYS,
    RESET_TOKEN_EXPIRE_MINUTES,
)
from devcamper.database.session import get_db
from devcamper.models import User
from devcamper.schemas.accessToken import Token
from devcamper.schemas.user import (
    CreateUserRequest,
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    UserOut,
)
from devcamper.utils import (
    authenticate_user,
    create_access_token,
    decode_token,
    hash_password,
)
from devcamper.utils.errorResponse import (
    DuplicateKey,
    InvalidCredentials,
    NotFound,
    Unauthenticated,
    UpstreamFailure,
    ValidationFailed,
)
from devcamper.utils.sendEmail import EmailMessage, Mailer, get_mailer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

oauth2_bearer = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

db_dependency = Annotated[Session, Depends(get_db)]


def get_current_user(
    db: db_dependency,
    bearer_token: Annotated[Optional[str], Depends(oauth2_bearer)],
    cookie_token: Annotated[Optional[str], Cookie(alias="token")] = None,
) -> User:
    """Resolve the actor from ``Authorization: Bearer`` or the ``token`` cookie."""
    token = bearer_token or cookie_token
    if not token:
        raise Unauthenticated()

    user = db.get(User, decode_token(token))
    if user is None:
        raise Unauthenticated()
    return user


user_dependency = Annotated[User, Depends(get_current_user)]


def send_token_response(user: User, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    token = create_access_token(user)
    response = JSONResponse(Token(token=token).model_dump(), status_code=status_code)
    response.set_cookie(
        "token",
        token,
        max_age=JWT_COOKIE_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=ENVIRONMENT == "production",
    )
    return response


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()


# --------------------------------------------------------------------------------------
@router.post("/register")
def register(db: db_dependency, new_user: CreateUserRequest):
    email = new_user.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise DuplicateKey()

    user = User(
        name=new_user.name,
        email=email,
        role=new_user.role,
        hashed_password=hash_password(new_user.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id} as {user.role}")

    return send_token_response(user)


@router.post("/login")
def login(db: db_dependency, credentials: LoginRequest):
    if not credentials.email or not credentials.password:
        raise ValidationFailed("Please provide an email and a password")

    user = authenticate_user(credentials.email, credentials.password, db)
    if not user:
        raise InvalidCredentials()

    return send_token_response(user)


@router.get("/me")
def get_me(user: user_dependency):
    return {"success": True, "data": UserOut.model_validate(user).model_dump(by_alias=True, mode="json")}


@router.get("/logout")
def logout():
    response = JSONResponse({"success": True, "data": {}})
    response.delete_cookie("token")
    return response


mailer_dependency = Annotated[Mailer, Depends(get_mailer)]


def send_reset_email(email: str, request: Request, db: Session, mailer: Mailer):
    user = db.query(User).filter(User.email == email.lower()).first()
    if user is None:
        raise NotFound("There is no user with that email")

    raw_token = secrets.token_hex(20)
    user.reset_password_token = hash_reset_token(raw_token)
    user.reset_password_expire = datetime.utcnow() + timedelta(
        minutes=RESET_TOKEN_EXPIRE_MINUTES
    )
    db.commit()

    reset_url = f"{request.base_url}api/v1/auth/resetpassword/{raw_token}"
    message = EmailMessage(
        to=user.email,
        subject="Password reset token",
        text=(
            "You are receiving this email because you (or someone else) has "
            f"requested the reset of a password. Please make a PUT request to:\n\n{reset_url}"
        ),
    )

    try:
        mailer.send(message)
    except Exception as e:
        logger.error(f"Reset email to user {user.id} failed: {e}")
        user.reset_password_token = None
        user.reset_password_expire = None
        db.commit()
        raise UpstreamFailure("Email could not be sent", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return {"success": True, "data": "Email sent"}


@router.post("/forgotpassword")
def forgot_password(
    payload: ForgotPasswordRequest, request: Request, db: db_dependency, mailer: mailer_dependency
):
    return send_reset_email(payload.email, request, db, mailer)


# GET form of the same route, email in the query string
@router.get("/forgotpassword")
def forgot_password_by_query(
    email: Annotated[EmailStr, Query()], request: Request, db: db_dependency, mailer: mailer_dependency
):
    return send_reset_email(email, request, db, mailer)


@router.put("/resetpassword/{resettoken}")
def reset_password(resettoken: str, payload: ResetPasswordRequest, db: db_dependency):
    user = (
        db.query(User)
        .filter(
            User.reset_password_token == hash_reset_token(resettoken),
            User.reset_password_expire > datetime.utcnow(),
        )
        .first()
    )
    if user is None:
        raise ValidationFailed("Invalid token")

    user.hashed_password = hash_password(payload.password)
    user.reset_password_token = None
    user.reset_password_expire = None
    db.commit()

    return send_token_response(user)
