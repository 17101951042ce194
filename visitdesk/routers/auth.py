"""Admin login / logout (signed session cookie, bearer token for API clients)."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from visitdesk.database import get_db
from visitdesk.dependencies import SESSION_ADMIN_KEY, get_current_admin
from visitdesk.models.admin import Admin
from visitdesk.schemas.auth import AdminLogin, AdminLoginResponse, AdminResponse, UpdateLanguageRequest
from visitdesk.services.auth import authenticate, create_access_token

router = APIRouter(prefix="/api/admin", tags=["auth"])
log = logging.getLogger("uvicorn.error")


@router.post("/login", response_model=AdminLoginResponse)
def login(request: Request, data: AdminLogin, db: Session = Depends(get_db)):
    admin = authenticate(db, data.username, data.password)
    if not admin:
        log.info("Authentication failed for username: %s", data.username)
        raise HTTPException(status_code=401, detail="Authentication failed")
    request.session[SESSION_ADMIN_KEY] = admin.id
    token = create_access_token(admin.id, admin.username)
    return AdminLoginResponse(
        id=admin.id,
        username=admin.username,
        preferred_language=admin.preferred_language,
        created_at=admin.created_at,
        access_token=token,
    )


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"success": True, "message": "Logged out"}


@router.get("/user", response_model=AdminResponse)
def current_user(current_admin: Admin = Depends(get_current_admin)):
    return AdminResponse.model_validate(current_admin)


@router.post("/update-language", response_model=AdminResponse)
def update_language(
    data: UpdateLanguageRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    current_admin.preferred_language = data.preferred_language
    db.add(current_admin)
    db.commit()
    db.refresh(current_admin)
    return AdminResponse.model_validate(current_admin)
