"""Visitor check-in form, admin patch and response schemas."""
import re
from datetime import datetime
from pydantic import EmailStr, Field, field_validator
from visitdesk.models.visitor import Sex
from visitdesk.schemas.common import CamelModel

PHONE_MIN_DIGITS = 9
PHONE_MAX_DIGITS = 15
MIN_YEAR_OF_BIRTH = 1900


def _validate_phone_digits(phone: str) -> str:
    phone = (phone or "").strip()
    digits = re.sub(r"\D", "", phone)
    if not digits:
        raise ValueError("Phone number is required.")
    if len(digits) < PHONE_MIN_DIGITS:
        raise ValueError(f"Phone number must have at least {PHONE_MIN_DIGITS} digits.")
    if len(digits) > PHONE_MAX_DIGITS:
        raise ValueError(f"Phone number cannot exceed {PHONE_MAX_DIGITS} digits.")
    return phone


def _validate_year_of_birth(year: int) -> int:
    if year < MIN_YEAR_OF_BIRTH:
        raise ValueError("Please enter a valid year")
    if year > datetime.now().year:
        raise ValueError("Year cannot be in the future")
    return year


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class CheckInRequest(CamelModel):
    """Kiosk form. Email is optional; an empty string counts as absent."""
    full_name: str = Field(..., min_length=2, max_length=255)
    year_of_birth: int
    email: EmailStr | None = None
    phone_number: str
    purpose: str | None = Field(None, max_length=255)
    sex: Sex | None = None
    municipality: str | None = Field(None, max_length=100)

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", "purpose", "municipality", "sex", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)

    @field_validator("year_of_birth")
    @classmethod
    def year_valid(cls, v: int) -> int:
        return _validate_year_of_birth(v)

    @field_validator("phone_number")
    @classmethod
    def phone_valid(cls, v: str) -> str:
        return _validate_phone_digits(v)


class ReturningCheckInRequest(CamelModel):
    visitor_id: int


class VisitorLookupRequest(CamelModel):
    phone_number: str
    year_of_birth: int | None = None


class VisitorUpdate(CamelModel):
    """Admin edit. Only the fields actually sent are written."""
    id: int
    full_name: str | None = Field(None, min_length=2, max_length=255)
    year_of_birth: int | None = None
    email: EmailStr | None = None
    phone_number: str | None = None
    sex: Sex | None = None
    municipality: str | None = Field(None, max_length=100)

    @field_validator("email", "municipality", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)

    @field_validator("year_of_birth")
    @classmethod
    def year_valid(cls, v: int | None) -> int | None:
        return v if v is None else _validate_year_of_birth(v)

    @field_validator("phone_number")
    @classmethod
    def phone_valid(cls, v: str | None) -> str | None:
        return v if v is None else _validate_phone_digits(v)


class VerifyVisitorRequest(CamelModel):
    visitor_id: int
    verified: bool


class VisitorResponse(CamelModel):
    id: int
    badge_id: str
    full_name: str
    year_of_birth: int
    sex: Sex | None = None
    municipality: str | None = None
    email: str | None = None
    phone_number: str
    verified: bool
    visit_count: int
    deleted: bool
    created_at: datetime
    updated_at: datetime | None = None


class VisitorLookupResponse(CamelModel):
    found: bool
    visitor: VisitorResponse | None = None
    message: str | None = None
