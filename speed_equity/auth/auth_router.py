# speed_equity/auth/auth_router.py

import logging
import re

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, field_validator
from sqlalchemy.orm import Session

from speed_equity.database import get_db
from speed_equity.models.user import User
from speed_equity.auth.auth_context import (
    AuthContext,
    create_access_token,
    get_auth_context,
    hash_password,
    revoke_context,
    verify_password,
)

router = APIRouter(tags=["auth"])
logger = logging.getLogger("speed_equity.auth")

# (pattern, message) pairs a password has to satisfy
PASSWORD_RULES = [
    (r".{8,}", "Password must be at least 8 chars"),
    (r"[A-Z]", "Must contain uppercase"),
    (r"\d", "Must contain number"),
    (r"[^A-Za-z0-9]", "Must contain symbol"),
]


class Credentials(BaseModel):
    email: EmailStr
    password: str


class SignUp(Credentials):
    confirm_password: str

    @field_validator("password")
    def strong_enough(cls, value):
        for pattern, message in PASSWORD_RULES:
            if not re.search(pattern, value):
                raise ValueError(message)
        return value

    @field_validator("confirm_password")
    def same_as_password(cls, v, info):
        if v != info.data.get("password"):
            raise ValueError("Passwords do not match.")
        return v


@router.post("/register", status_code=201)
def register_user(body: SignUp, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == body.email).first():
        raise HTTPException(400, "Email already registered")

    user = User(email=body.email, password_hash=hash_password(body.password))
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("user_registered", extra={"user_id": user.id})
    return {"id": user.id, "email": user.email}


@router.post("/login")
def login(body: Credentials, db: Session = Depends(get_db)):
    """Sign-in: issues the token every later AuthContext is built from."""
    user = db.query(User).filter(User.email == body.email).first()
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(401, "Invalid credentials")

    return {"access_token": create_access_token(str(user.id)), "token_type": "bearer"}


@router.post("/logout")
def logout(ctx: AuthContext = Depends(get_auth_context), db: Session = Depends(get_db)):
    revoke_context(db, ctx)
    return {"message": "Signed out"}


@router.get("/me")
def whoami(ctx: AuthContext = Depends(get_auth_context)):
    return {"id": ctx.user_id, "email": ctx.email}
