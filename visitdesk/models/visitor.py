"""Visitors and their visits (check-in / check-out episodes)."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from visitdesk.database import Base
import enum

BADGE_PREFIX = "VIS-"


class Sex(str, enum.Enum):
    male = "Male"
    female = "Female"


def format_badge_id(visitor_id: int) -> str:
    """Badge shown on screen and on printed passes: VIS-00042."""
    return f"{BADGE_PREFIX}{visitor_id:05d}"


class Visitor(Base):
    __tablename__ = "visitors"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    year_of_birth = Column(Integer, nullable=False)
    sex = Column(SQLEnum(Sex), nullable=True)
    municipality = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    phone_number = Column(String(50), nullable=False, index=True)

    # Admin-controlled trust marker
    verified = Column(Boolean, nullable=False, default=False)
    visit_count = Column(Integer, nullable=False, default=0)
    # Soft delete: trashed visitors are hidden from listings until restored or purged
    deleted = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    visits = relationship("Visit", back_populates="visitor", cascade="all, delete-orphan")

    @property
    def badge_id(self) -> str:
        return format_badge_id(self.id)

    def __repr__(self):
        return f"<Visitor(id={self.id}, full_name={self.full_name}, deleted={self.deleted})>"


class Visit(Base):
    __tablename__ = "visits"

    id = Column(Integer, primary_key=True, index=True)
    visitor_id = Column(Integer, ForeignKey("visitors.id"), nullable=False, index=True)
    purpose = Column(String(255), nullable=True)

    check_in_time = Column(DateTime, nullable=False, default=datetime.now)
    # NULL while the visitor is still on site
    check_out_time = Column(DateTime, nullable=True)
    active = Column(Boolean, nullable=False, default=True, index=True)

    # Companion visit; kept mutual (A -> B implies B -> A)
    partner_id = Column(Integer, ForeignKey("visits.id", ondelete="SET NULL"), nullable=True)

    visitor = relationship("Visitor", back_populates="visits")

    def __repr__(self):
        return f"<Visit(id={self.id}, visitor_id={self.visitor_id}, active={self.active})>"
