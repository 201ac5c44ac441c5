import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response
from passlib.context import CryptContext
from sqlmodel import Session, select

from taquara_backend.core.config import SESSION_COOKIE_NAME, SESSION_TTL_MINUTES
from taquara_backend.core.database import get_session
from taquara_backend.models.user_model import User, UserLogin

logger = logging.getLogger(__name__)

router = APIRouter()
# bcrypt hashes from older databases still verify; new hashes use pbkdf2_sha256
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


# =========================================
# SESSION STORE
# =========================================
class SessionStore:
    """Maps session tokens to user ids. Created on login, deleted on logout or expiry."""

    def create(self, user_id: int) -> str:
        raise NotImplementedError

    def get(self, token: str) -> Optional[int]:
        raise NotImplementedError

    def delete(self, token: str) -> None:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    def __init__(self, ttl_minutes: int = SESSION_TTL_MINUTES):
        self.ttl = timedelta(minutes=ttl_minutes)
        self._sessions: Dict[str, Tuple[int, datetime]] = {}

    def create(self, user_id: int) -> str:
        self.purge_expired()
        token = secrets.token_hex(16)
        self._sessions[token] = (user_id, datetime.now(timezone.utc) + self.ttl)
        return token

    def get(self, token: str) -> Optional[int]:
        session = self._sessions.get(token)
        if session is None:
            return None
        user_id, expires_at = session
        if expires_at <= datetime.now(timezone.utc):
            del self._sessions[token]
            return None
        return user_id

    def delete(self, token: str) -> None:
        self._sessions.pop(token, None)

    def purge_expired(self) -> None:
        now = datetime.now(timezone.utc)
        for token in [t for t, (_, expires_at) in self._sessions.items() if expires_at <= now]:
            del self._sessions[token]


_session_store = InMemorySessionStore()


def get_session_store() -> SessionStore:
    return _session_store


# =========================================
# DEPENDENCIES
# =========================================
def get_current_user(
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    store: SessionStore = Depends(get_session_store),
    session: Session = Depends(get_session),
) -> User:
    """Resolves the logged-in user from the session cookie (401 if missing or expired)."""
    user_id = store.get(session_token) if session_token else None
    user = session.get(User, user_id) if user_id is not None else None
    if not user:
        raise HTTPException(status_code=401, detail="Not logged in")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


# === LOGIN ===

@router.post("/login")
def login(data: UserLogin, response: Response, session: Session = Depends(get_session),
          store: SessionStore = Depends(get_session_store)):
    user = session.exec(select(User).where(User.email == data.email)).first()
    # Only the admin has credentials; presenters never log in
    if not user or not user.is_admin or not user.password_hash:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not pwd_context.verify(data.password, user.password_hash):
        logger.warning("Failed login for %s", data.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = store.create(user.id)
    response.set_cookie(SESSION_COOKIE_NAME, token, httponly=True, max_age=SESSION_TTL_MINUTES * 60)
    logger.info("User %s logged in", user.id)
    return {"message": "Login successful", "user": {"id": user.id, "name": user.name}}


# === LOGOUT ===

@router.post("/logout")
def logout(response: Response,
           session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
           store: SessionStore = Depends(get_session_store)):
    if session_token:
        store.delete(session_token)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out"}
