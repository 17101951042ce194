"""Admin auth service (password hashing, bearer tokens, default admin)."""
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from sqlalchemy.orm import Session

from visitdesk.config import get_settings
from visitdesk.models.admin import Admin

settings = get_settings()
log = logging.getLogger("uvicorn.error")


def _pwd_bytes(password: str, max_len: int = 72) -> bytes:
    return password.encode("utf-8")[:max_len]


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_pwd_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_pwd_bytes(password), bcrypt.gensalt()).decode("utf-8")


def authenticate(db: Session, username: str, password: str) -> Admin | None:
    admin = db.query(Admin).filter(Admin.username == username).first()
    if not admin or not verify_password(password, admin.hashed_password):
        return None
    return admin


def create_access_token(admin_id: int, username: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    # PyJWT expects "sub" to be a string
    payload = {"sub": str(admin_id), "username": username, "exp": expire}
    raw = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return raw if isinstance(raw, str) else raw.decode("utf-8")


def decode_token(token: str) -> dict | None:
    if not token:
        return None
    try:
        return jwt.decode(token.strip(), settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError:
        return None


def ensure_default_admin(db: Session) -> Admin:
    """Create the configured default admin if no admin with that username exists."""
    admin = db.query(Admin).filter(Admin.username == settings.default_admin_username).first()
    if admin:
        return admin
    admin = Admin(
        username=settings.default_admin_username,
        hashed_password=get_password_hash(settings.default_admin_password),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    log.info("Default admin created: %s", admin.username)
    return admin
