"""Shared dependencies: DB session, current admin."""
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from visitdesk.database import get_db
from visitdesk.models.admin import Admin
from visitdesk.services.auth import decode_token

SESSION_ADMIN_KEY = "admin_id"

security = HTTPBearer(auto_error=False)


def _admin_id_from_request(request: Request, credentials: HTTPAuthorizationCredentials | None) -> int | None:
    """Session cookie first, then a bearer token for API clients."""
    admin_id = request.session.get(SESSION_ADMIN_KEY)
    if admin_id is not None:
        return admin_id
    if not credentials:
        return None
    payload = decode_token((credentials.credentials or "").strip())
    if not payload:
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None


def get_current_admin(
    request: Request,
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Admin:
    admin_id = _admin_id_from_request(request, credentials)
    if admin_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    admin = db.query(Admin).filter(Admin.id == admin_id).first()
    if not admin:
        request.session.pop(SESSION_ADMIN_KEY, None)
        raise HTTPException(status_code=401, detail="Unauthorized")
    return admin
