# speed_equity/auth/auth_context.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import os
import uuid

from dotenv import load_dotenv
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from speed_equity.database import get_db
from speed_equity.models.user import RevokedToken, User

# ================= ENV =================
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", ".env"))

SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

if not SECRET_KEY:
    raise RuntimeError("SECRET_KEY missing in .env!")

# ================= SECURITY =================
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

logger = logging.getLogger("speed_equity.auth")


# ================= HELPERS =================
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(sub: str, minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES):
    exp = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {"sub": sub, "exp": exp, "jti": uuid.uuid4().hex, "type": "access"}
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


# ================= CONTEXT =================
@dataclass
class AuthContext:
    """Authenticated caller for one request.

    Built on sign-in (token issued by ``/auth/login``) and torn down on
    sign-out, which revokes ``token_id`` so the same token cannot rebuild it.
    """

    user: User
    token_id: str
    expires_at: Optional[datetime] = None

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email


def get_auth_context(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    try:
        data = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id = int(data["sub"])
        token_id = data["jti"]
    except (JWTError, KeyError, ValueError):
        raise HTTPException(401, "Invalid or expired token")

    if data.get("type") != "access":
        raise HTTPException(401, "Invalid or expired token")

    if db.get(RevokedToken, token_id) is not None:
        raise HTTPException(401, "Token has been revoked")

    user = db.get(User, user_id)
    if not user or not user.is_active:
        raise HTTPException(401, "User not found or inactive")

    exp = data.get("exp")
    expires_at = datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None
    return AuthContext(user=user, token_id=token_id, expires_at=expires_at)


def revoke_context(db: Session, ctx: AuthContext) -> None:
    # rows past expires_at can no longer match a decodable token
    purged = (
        db.query(RevokedToken)
        .filter(RevokedToken.expires_at.is_not(None), RevokedToken.expires_at < datetime.now(timezone.utc))
        .delete(synchronize_session=False)
    )
    db.add(RevokedToken(jti=ctx.token_id, user_id=ctx.user_id, expires_at=ctx.expires_at))
    db.commit()
    if purged:
        logger.info("revoked_tokens_purged", extra={"count": purged})
    logger.info("session_revoked", extra={"user_id": ctx.user_id})
