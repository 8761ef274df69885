"""SQLAlchemy ORM models for AerialTimer."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Preference(Base):
    """Key-value preference scoped to a device or user."""

    __tablename__ = "preferences"
    __table_args__ = (UniqueConstraint("scope", "key", name="uq_preference_scope_key"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    scope = Column(String(64), nullable=False, default="default")
    key = Column(String(128), nullable=False)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def __repr__(self) -> str:
        return f"<Preference scope={self.scope} key={self.key}>"
