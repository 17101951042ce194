"""Admin accounts for the staff dashboard."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from visitdesk.database import Base


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    preferred_language = Column(String(10), nullable=False, default="en")

    created_at = Column(DateTime, server_default=func.now())
