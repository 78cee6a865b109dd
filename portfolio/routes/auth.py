from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy.orm import Session

from portfolio.database import get_db
from portfolio.deps import get_current_user
from portfolio.models import User
from portfolio.security import authenticate, token_for_user

router = APIRouter(prefix="/auth", tags=["Auth"])


class LoginPayload(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class MeOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: str


@router.post("/login", response_model=TokenOut)
def login(body: LoginPayload, db: Session = Depends(get_db)):
    user = authenticate(db, body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return TokenOut(access_token=token_for_user(user))


@router.get("/me", response_model=MeOut)
def me(user: User = Depends(get_current_user)):
    return MeOut(id=user.id, email=user.email, name=user.name, role=user.role)
