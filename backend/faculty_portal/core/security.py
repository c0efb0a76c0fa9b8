from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt
import bcrypt

from faculty_portal.core.config import settings
from faculty_portal.core.exceptions import InvalidTokenError


BCRYPT_MAX_BYTES = 72


def _bcrypt_input(password: str) -> bytes:
    # bcrypt ignores everything past 72 bytes; newer releases raise instead
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_bcrypt_input(plain_password), hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """bcrypt hash with BCRYPT_ROUNDS rounds"""
    hashed = bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def create_user_token(user_id: int) -> str:
    """Access token carrying only the user identifier"""
    return create_access_token({"sub": str(user_id)})


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode JWT token.

    Expired, tampered and malformed tokens all raise the same InvalidTokenError;
    callers never learn which check failed.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise InvalidTokenError()

    if payload.get("type") != "access":
        raise InvalidTokenError()

    return payload
