# portfolio/deps.py
from typing import Callable, Optional

import jwt  # PyJWT
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from portfolio.config import ADMIN_ROLE
from portfolio.database import get_db
from portfolio.models import User
from portfolio.security import decode_token

# auto_error=False so a missing header is a 401 (HTTPBearer would send 403)
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_token(db: Session, token: str) -> User:
    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except jwt.PyJWTError:
        raise _unauthorized("Invalid token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token subject")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise _unauthorized()
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Strict auth dependency: 401 unless a valid Bearer token is present."""
    if credentials is None or (credentials.scheme or "").lower() != "bearer":
        raise _unauthorized()
    token = (credentials.credentials or "").strip()
    if not token:
        raise _unauthorized()
    return _user_from_token(db, token)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Soft auth dependency: the user for a valid token, else None."""
    if credentials is None or (credentials.scheme or "").lower() != "bearer":
        return None
    token = (credentials.credentials or "").strip()
    if not token:
        return None
    try:
        return _user_from_token(db, token)
    except HTTPException:
        return None


def require_role(role: str) -> Callable[..., User]:
    """
    Dependency factory for role-gated endpoints.

        @router.post("", dependencies=[Depends(require_admin)])

    Unauthenticated -> 401 (from get_current_user), wrong role -> 403.
    """
    def _checker(user: User = Depends(get_current_user)) -> User:
        if user.role != role:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return user

    _checker.__name__ = f"require_{role.lower()}"
    return _checker


require_admin = require_role(ADMIN_ROLE)
