from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response

from grocery_api.config import get_settings
from grocery_api.models.schemas import LoginRequest, LoginResponse
from grocery_api.services.auth_service import authenticate, create_session_token

router = APIRouter(prefix="/api/login", tags=["auth"])


@router.post("/authenticate", response_model=LoginResponse)
def login(payload: LoginRequest, response: Response) -> LoginResponse:
    user = authenticate(payload.username, payload.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid username or password.")

    token = create_session_token(user_id=user.id, username=user.username)
    settings = get_settings()
    response.set_cookie(
        key=settings.jwt_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
    )
    return user


@router.post("/logout")
def logout(response: Response) -> dict[str, str]:
    settings = get_settings()
    response.delete_cookie(settings.jwt_cookie_name)
    return {"status": "ok"}
