"""SQLAlchemy ORM models for PomoBlocks."""

from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class StoredItem(Base):
    """One string-keyed, string-valued entry of the local store."""

    __tablename__ = "stored_items"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<StoredItem key={self.key} size={len(self.value or '')}>"
