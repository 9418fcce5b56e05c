import datetime as dt
from zoneinfo import ZoneInfo

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.core.config import settings
from app.core.security import decode_token
from app.db.models.user import User, Role
from app.crud.users import get_user_by_login

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

ALL_ROLES = tuple(Role)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_today() -> dt.date:
    """Calendar date at the project sites; overridden in tests."""
    return dt.datetime.now(ZoneInfo(settings.TZ)).date()

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    try:
        payload = decode_token(token)
    except (JWTError, ValidationError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = get_user_by_login(db, payload.sub)
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found/disabled")
    return user

def require_roles(*roles: Role):
    allowed = {r.value for r in roles}
    def _dep(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(status_code=403, detail="Forbidden")
        return user
    return _dep
