"""Application settings (public read, admin write)."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from visitdesk.database import get_db
from visitdesk.dependencies import get_current_admin
from visitdesk.schemas.settings import SettingsUpdate, SettingsResponse
from visitdesk.services.app_settings import get_or_create_settings, update_settings

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
def read_settings(db: Session = Depends(get_db)):
    row = get_or_create_settings(db)
    db.commit()
    return SettingsResponse.model_validate(row)


@router.post("", response_model=SettingsResponse)
def save_settings(
    data: SettingsUpdate,
    db: Session = Depends(get_db),
    current_admin=Depends(get_current_admin),
):
    row = update_settings(db, data)
    db.commit()
    db.refresh(row)
    return SettingsResponse.model_validate(row)
