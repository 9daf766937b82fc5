import secrets
from datetime import datetime, timedelta, timezone

import jwt

from filenest.core.config import settings


class InvalidTokenError(Exception):
    pass


def authenticate(username: str, password: str) -> bool:
    # Compare both fields unconditionally.
    user_ok = secrets.compare_digest(
        (username or "").encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8")
    )
    pass_ok = secrets.compare_digest(
        (password or "").encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8")
    )
    return user_ok and pass_ok


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {
        "sub": subject,
        "username": subject,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token expired")
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(str(e))

    if payload.get("sub") != settings.ADMIN_USERNAME:
        raise InvalidTokenError("Unknown subject")
    return payload
