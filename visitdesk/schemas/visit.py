"""Visit schemas: check-out, partner link, listings."""
from datetime import datetime
from pydantic import Field
from visitdesk.schemas.common import CamelModel
from visitdesk.schemas.visitor import VisitorResponse


class VisitResponse(CamelModel):
    id: int
    visitor_id: int
    purpose: str | None = None
    check_in_time: datetime
    check_out_time: datetime | None = None
    active: bool
    partner_id: int | None = None


class CheckOutRequest(CamelModel):
    visit_id: int


class UpdateVisitPurposeRequest(CamelModel):
    visit_id: int
    purpose: str = Field(..., min_length=1, max_length=255)


class SetVisitPartnerRequest(CamelModel):
    visit_id: int
    partner_id: int | None = None


class VisitPartnerResponse(CamelModel):
    visit: VisitResponse
    partner: VisitResponse | None = None


class CheckInResponse(CamelModel):
    visitor: VisitorResponse
    visit: VisitResponse
    is_returning_visitor: bool


class VisitWithVisitor(CamelModel):
    """Admin tables: one row per visit with its visitor."""
    visit: VisitResponse
    visitor: VisitorResponse


class VisitorDetail(CamelModel):
    visitor: VisitorResponse
    visits: list[VisitResponse]


class AutoCheckoutResponse(CamelModel):
    message: str
    count: int
