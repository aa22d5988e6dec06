# campsite_booking/auth.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from campsite_booking import models
from campsite_booking.config import settings
from campsite_booking.database import get_db
from campsite_booking.errors import AuthError


# Password Hashing Configuration (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 Bearer Token; missing headers are reported as AuthError below
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

# Password Hashing Functions
def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

# JWT Token Creation
def create_access_token(data: dict, expires_minutes: Optional[float] = None) -> str:
    """
    Creates a JWT access token for authentication.
    """
    to_encode = data.copy()
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def token_for_user(user: models.User) -> str:
    return create_access_token(data={"sub": str(user.id), "is_owner": bool(user.is_owner)})

# JWT Token Verification and User Retrieval
def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> models.User:
    if not token:
        raise AuthError("No token provided")

    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        subject = payload.get("sub")
        user_id = int(subject) if subject is not None else None
    except (JWTError, ValueError):
        raise AuthError("Invalid token")

    if user_id is None:
        raise AuthError("Invalid token")

    user = db.query(models.User).filter(models.User.id == user_id).first()
    if user is None:
        raise AuthError("Invalid token")

    return user
