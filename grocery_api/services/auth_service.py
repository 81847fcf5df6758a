from __future__ import annotations

import hmac
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from grocery_api.config import get_settings
from grocery_api.models.schemas import LoginResponse

# Single configured login; user ids only need to be stable within a process.
_LOGIN_USER_ID = 1


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=1)
def _configured_password_hash() -> str:
    # Hashed once so the plain-text password is never compared directly.
    return hash_password(get_settings().login_password)


def reset_login_cache() -> None:
    """Forget the cached password hash (used by tests after changing settings)."""
    _configured_password_hash.cache_clear()


def authenticate(username: str, password: str) -> LoginResponse | None:
    """Return the authenticated user (without password), or None."""
    settings = get_settings()
    username_ok = hmac.compare_digest(
        username.strip().lower().encode("utf-8"),
        settings.login_username.lower().encode("utf-8"),
    )
    if not username_ok or not verify_password(password, _configured_password_hash()):
        return None
    return LoginResponse(id=_LOGIN_USER_ID, username=settings.login_username)


def create_session_token(user_id: int, username: str) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.jwt_exp_minutes)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")


def decode_session_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
