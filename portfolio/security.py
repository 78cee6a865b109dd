# portfolio/security.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt  # PyJWT
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from portfolio.config import BCRYPT_ROUNDS, JWT_ALGO, JWT_EXPIRES_MIN, JWT_LEEWAY_SEC, JWT_SECRET
from portfolio.models import User

log = logging.getLogger("portfolio.auth")

_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(plain: str) -> str:
    return _pwd.hash(plain)


def verify_password(plain: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    try:
        return _pwd.verify(plain, hashed)
    except ValueError:
        # unknown/garbled hash format
        return False


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """
    Credential check for the login route. Fails closed: returns None when the
    user is missing, has no stored hash, or the password does not match.
    """
    if not email or not password:
        log.info("Login rejected: missing credentials")
        return None

    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if not user:
        log.info("Login rejected: no user with email %s", email)
        return None
    if not user.password_hash:
        log.info("Login rejected: user %s has no password hash", user.email)
        return None
    if not verify_password(password, user.password_hash):
        log.info("Login rejected: bad password for %s", user.email)
        return None

    log.info("Login ok for %s", user.email)
    return user


# ---------- Token creation ----------
def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(sub: str, extra: Optional[Dict[str, Any]] = None, minutes: Optional[int] = None) -> str:
    """
    Create a signed session token. `sub` is the user's id as a string.
    """
    if not isinstance(sub, str) or not sub.strip():
        raise ValueError("sub must be a non-empty string")

    exp_min = minutes if minutes is not None else JWT_EXPIRES_MIN
    now = _now_utc()
    payload: Dict[str, Any] = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=exp_min)).timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGO)


def token_for_user(user: User, minutes: Optional[int] = None) -> str:
    return create_access_token(
        sub=str(user.id),
        extra={"email": user.email, "role": user.role},
        minutes=minutes,
    )


def decode_token(token: str) -> Dict[str, Any]:
    """Decode & validate a token. Raises jwt.PyJWTError subclasses on failure."""
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGO], leeway=JWT_LEEWAY_SEC)
