# halaleco/auth/dependencies.py
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request, status

from ..config import settings
from .tokens import verify_token


def token_from_request(request: Request) -> str | None:
    header = request.headers.get("authorization")
    if header and header.startswith("Bearer "):
        return header[len("Bearer "):]
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


def optional_user(request: Request) -> Dict[str, Any] | None:
    token = token_from_request(request)
    if not token:
        return None
    return verify_token(token)


def current_user(user: Dict[str, Any] | None = Depends(optional_user)) -> Dict[str, Any]:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user


def require_roles(*roles: str, message: str = "Insufficient permissions"):
    def checker(user: Dict[str, Any] = Depends(current_user)) -> Dict[str, Any]:
        if user.get("role") not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)
        return user
    return checker
