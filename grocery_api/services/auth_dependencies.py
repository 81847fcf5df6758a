from __future__ import annotations

import hmac

import structlog
from fastapi import HTTPException, Request

from grocery_api.config import get_settings
from grocery_api.models.schemas import LoginResponse
from grocery_api.services.auth_service import decode_session_token


def require_api_key(request: Request) -> None:
    settings = get_settings()
    if not settings.api_key:
        return

    supplied = request.headers.get(settings.api_key_header, "")
    if not hmac.compare_digest(supplied.encode("utf-8"), settings.api_key.encode("utf-8")):
        remote_ip = request.client.host if request.client else None
        structlog.get_logger("auth").info("api_key_rejected", remote_ip=remote_ip)
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


def get_current_user(request: Request) -> LoginResponse:
    settings = get_settings()
    session_cookie = request.cookies.get(settings.jwt_cookie_name)
    if not session_cookie:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_session_token(session_cookie)
        user = LoginResponse(id=int(payload["sub"]), username=str(payload["username"]))
    except Exception as exc:  # noqa: BLE001
        raise HTTPException(status_code=401, detail="Invalid session") from exc

    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user
