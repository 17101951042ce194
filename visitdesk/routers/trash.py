"""Recycle bin: soft delete, restore, permanent delete, empty bin."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from visitdesk.database import get_db
from visitdesk.dependencies import get_current_admin
from visitdesk.models.admin import Admin
from visitdesk.schemas.common import MessageResponse
from visitdesk.schemas.visitor import VisitorResponse
from visitdesk.services import trash as trash_service
from visitdesk.services.system_log import (
    create_log,
    ACTION_VISITOR_DELETED,
    ACTION_VISITOR_RESTORED,
    ACTION_VISITOR_PERMANENTLY_DELETED,
    ACTION_RECYCLE_BIN_EMPTIED,
)

router = APIRouter(prefix="/api/admin", tags=["trash"])


class RestoreResponse(MessageResponse):
    visitor: VisitorResponse


class EmptyBinResponse(MessageResponse):
    count: int


@router.delete("/delete-visitor/{visitor_id}", response_model=MessageResponse)
def delete_visitor(
    visitor_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    if not trash_service.delete_visitor(db, visitor_id):
        raise HTTPException(status_code=400, detail="Cannot delete visitor. Ensure they have no active visits.")
    create_log(db, ACTION_VISITOR_DELETED, f"Visitor {visitor_id} moved to trash.", user_id=current_admin.id, affected_records=1)
    db.commit()
    return MessageResponse(message="Visitor moved to trash")


@router.get("/trash", response_model=list[VisitorResponse])
def trash(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return [VisitorResponse.model_validate(v) for v in trash_service.list_trash(db)]


@router.post("/restore-visitor/{visitor_id}", response_model=RestoreResponse)
def restore_visitor(
    visitor_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    visitor = trash_service.restore_visitor(db, visitor_id)
    create_log(db, ACTION_VISITOR_RESTORED, f"Visitor {visitor_id} restored from trash.", user_id=current_admin.id, affected_records=1)
    db.commit()
    db.refresh(visitor)
    return RestoreResponse(message="Visitor restored successfully", visitor=VisitorResponse.model_validate(visitor))


@router.delete("/permanently-delete/{visitor_id}", response_model=MessageResponse)
def permanently_delete(
    visitor_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    trash_service.permanently_delete_visitor(db, visitor_id)
    create_log(
        db,
        ACTION_VISITOR_PERMANENTLY_DELETED,
        f"Visitor {visitor_id} and all of their visits permanently deleted.",
        user_id=current_admin.id,
        affected_records=1,
    )
    db.commit()
    return MessageResponse(message="Visitor permanently deleted")


@router.delete("/empty-bin", response_model=EmptyBinResponse)
def empty_bin(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    count = trash_service.empty_bin(db)
    create_log(
        db,
        ACTION_RECYCLE_BIN_EMPTIED,
        f"Recycle bin emptied: {count} visitor(s) permanently deleted.",
        user_id=current_admin.id,
        affected_records=count,
    )
    db.commit()
    return EmptyBinResponse(message="Recycle bin emptied successfully", count=count)
