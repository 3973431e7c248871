import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from jose import JWTError, jwt
import bcrypt
from sqlmodel import Session

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from ..database import get_db
from ..errors import Unauthorized
from ..models import User
from ..schemas.common import ApiResponse
from ..schemas.user import AuthResponse, TokenData, User as UserSchema, UserCreate, UserLogin
from ..services import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')[:72]
    hashed_bytes = hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt directly."""
    password_bytes = password.encode('utf-8')[:72]  # Truncate to 72 bytes (bcrypt limit)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Authenticate a user."""
    user = UserStore(db).get_by_email(email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token carrying the user's id and email."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": str(user.id), "email": user.email, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _get_token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return request.cookies.get("token")


def _decode_token(token: str) -> Optional[TokenData]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        subject = payload.get("sub")
        email = payload.get("email")
        if not subject or not email:
            return None
        return TokenData(user_id=int(subject), email=email)
    except (JWTError, ValueError):
        return None


def _set_token_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key="token",
        value=token,
        httponly=True,
        secure=False,  # Set to True in production with HTTPS
        samesite="lax",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> User:
    """Get current user from JWT token."""
    token = _get_token_from_request(request)
    if not token:
        raise Unauthorized("Authentication token is required")

    token_data = _decode_token(token)
    if token_data is None:
        raise Unauthorized("Invalid or expired token")

    user = UserStore(db).get(token_data.user_id)
    if user is None or user.email != token_data.email:
        raise Unauthorized("Invalid or expired token")
    return user


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    user: UserCreate,
    response: Response,
    db: Session = Depends(get_db),
):
    """Create a new user account."""
    db_user = UserStore(db).create(
        email=user.email,
        hashed_password=get_password_hash(user.password),
        display_name=user.name,
    )

    access_token = create_access_token(db_user)
    _set_token_cookie(response, access_token)

    return ApiResponse(
        message="User registered successfully",
        data=AuthResponse(user=UserSchema.model_validate(db_user), token=access_token),
    )


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
):
    """Sign in and get JWT token."""
    db_user = authenticate_user(db, credentials.email, credentials.password)
    if not db_user:
        logger.info("Failed login attempt")
        raise Unauthorized("Invalid email or password")

    access_token = create_access_token(db_user)
    _set_token_cookie(response, access_token)

    return ApiResponse(
        message="Login successful",
        data=AuthResponse(user=UserSchema.model_validate(db_user), token=access_token),
    )


@router.post("/logout", response_model=ApiResponse[None])
def logout(response: Response):
    """Sign out and clear session cookie."""
    response.delete_cookie(key="token")
    return ApiResponse(message="Logged out")


@router.get("/me", response_model=ApiResponse[UserSchema])
def read_users_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return ApiResponse(data=UserSchema.model_validate(current_user))
