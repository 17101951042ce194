"""Soft delete, restore and permanent removal of visitors."""
import logging

from sqlalchemy.orm import Session

from visitdesk.models.visitor import Visitor, Visit
from visitdesk.models.visitor_report import VisitorReport
from visitdesk.services.errors import NotFoundError
from visitdesk.services.visits import has_active_visit, clear_partner_links_to

log = logging.getLogger("uvicorn.error")


def get_visitor(db: Session, visitor_id: int) -> Visitor:
    visitor = db.query(Visitor).filter(Visitor.id == visitor_id).first()
    if not visitor:
        raise NotFoundError("Visitor not found")
    return visitor


def list_trash(db: Session) -> list[Visitor]:
    return db.query(Visitor).filter(Visitor.deleted.is_(True)).order_by(Visitor.id.desc()).all()


def delete_visitor(db: Session, visitor_id: int) -> bool:
    """Move to trash. Returns False (no error) while the visitor is still checked in."""
    visitor = get_visitor(db, visitor_id)
    if has_active_visit(db, visitor.id):
        return False
    visitor.deleted = True
    db.add(visitor)
    db.flush()
    return True


def restore_visitor(db: Session, visitor_id: int) -> Visitor:
    visitor = get_visitor(db, visitor_id)
    visitor.deleted = False
    db.add(visitor)
    db.flush()
    return visitor


def permanently_delete_visitor(db: Session, visitor_id: int) -> None:
    """Irreversible: removes reports, visits, then the visitor row."""
    visitor = get_visitor(db, visitor_id)
    visit_ids = [row.id for row in db.query(Visit.id).filter(Visit.visitor_id == visitor.id)]
    clear_partner_links_to(db, visit_ids)
    db.query(VisitorReport).filter(VisitorReport.visitor_id == visitor.id).delete(synchronize_session=False)
    db.query(Visit).filter(Visit.visitor_id == visitor.id).delete(synchronize_session=False)
    db.expire(visitor, ["visits"])
    db.delete(visitor)
    db.flush()
    log.info("Visitor id=%s permanently deleted with %d visit(s)", visitor_id, len(visit_ids))


def empty_bin(db: Session) -> int:
    trashed = list_trash(db)
    for visitor in trashed:
        permanently_delete_visitor(db, visitor.id)
    return len(trashed)
