# hirelink/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from hirelink.core.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


# -------------------------
# Password hashing
# -------------------------
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


# -------------------------
# Login session tokens
# -------------------------
def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def session_tokens_enabled() -> bool:
    return bool(settings.JWT_SECRET and settings.JWT_SECRET.strip())


def create_session_token(account_id: int, email: str) -> str:
    """
    Client session token returned by /login when JWT_SECRET is configured.

    Not accepted by the bearer gate on /add-job, which only trusts the
    identity service.
    """
    if not session_tokens_enabled():
        raise RuntimeError("JWT_SECRET must be set to issue session tokens.")

    now = _now_utc()
    exp = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": str(account_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

