from datetime import datetime, timedelta, timezone
from jose import jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from app.core.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class TokenPayload(BaseModel):
    sub: str
    role: str
    iat: int
    exp: int


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)

def create_access_token(sub: str, role: str, expires_min: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    ttl = timedelta(minutes=expires_min if expires_min is not None else settings.JWT_EXPIRES_MIN)
    payload = TokenPayload(sub=sub, role=role, iat=int(now.timestamp()), exp=int((now + ttl).timestamp()))
    return jwt.encode(payload.model_dump(), settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def decode_token(token: str) -> TokenPayload:
    # jose checks exp; a payload missing our claims fails validation
    return TokenPayload.model_validate(jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG]))
