from datetime import timedelta
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext

from blogcms.core.timeutils import utc_now

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    data: Dict[str, Any],
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None,
) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(hours=24)
    to_encode.update({"exp": utc_now() + expires_delta})
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """
    Verify the signature and expiry of a token and return its claims.
    Raises jose.JWTError (ExpiredSignatureError included) on failure.
    """
    return jwt.decode(token, secret_key, algorithms=[algorithm])
