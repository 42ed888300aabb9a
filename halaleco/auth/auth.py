# halaleco/auth/auth.py
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..config import settings
from ..dependencies import get_directory
from ..schemas import AuthResponse, LoginInput, RegisterInput, UserOut
from ..utils.logging import logger
from .dependencies import optional_user
from .passwords import AccountDirectory
from .tokens import issue_token

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_auth_cookie(resp: Response, token: str) -> None:
    resp.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        max_age=settings.token_max_age,
    )


def _auth_response(user: Dict[str, Any], message: str) -> AuthResponse:
    role = user.get("role") or "user"
    token = issue_token(user["id"], user["email"], role)
    return AuthResponse(
        message=message,
        token=token,
        user=UserOut(id=user["id"], email=user["email"], name=user.get("name"), role=role),
    )


@router.post("/login")
def login(payload: LoginInput, response: Response,
          directory: AccountDirectory = Depends(get_directory)):
    user = directory.authenticate(payload.email, payload.password)
    if user is None:
        logger.info("Login rejected email=%s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    body = _auth_response(user, "Login successful")
    _set_auth_cookie(response, body.token)
    return body.dump()


@router.post("/register")
def register(payload: RegisterInput, response: Response):
    """
    Issues a token for the new account. Nothing is stored: the account only
    exists for as long as its token is valid.
    """
    user = {
        "id": str(int(time.time() * 1000)),
        "email": payload.email,
        "name": payload.name,
        "role": "user",
    }
    body = _auth_response(user, "Registration successful")
    _set_auth_cookie(response, body.token)
    logger.info("Registered email=%s company=%s", payload.email, payload.company)
    return body.dump()


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME, httponly=True, samesite="strict",
                           secure=settings.cookie_secure)
    return {"success": True, "message": "Logged out"}


@router.get("/me")
def me(user: Dict[str, Any] | None = Depends(optional_user)):
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return {
        "success": True,
        "user": UserOut(
            id=user["userId"],
            email=user["email"],
            name=user["email"].split("@")[0],
            role=user.get("role", "user"),
        ).dump(),
    }
