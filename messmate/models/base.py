import uuid
from datetime import datetime, UTC
from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all MessMate tables"""

    pass


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_uuid() -> str:
    """String primary key for groups and ledger records"""
    return str(uuid.uuid4())


class TimestampMixin:
    """Adds created_at / updated_at columns maintained by the ORM"""

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
