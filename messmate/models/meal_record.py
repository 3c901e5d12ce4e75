import datetime
from sqlalchemy import String, Integer, ForeignKey, Date, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column
from messmate.models.base import Base, TimestampMixin, new_uuid


class MealRow(Base, TimestampMixin):
    """
    Meals eaten by one resident on one day.

    Zero-meal days are represented by the absence of a row, never by a row
    with meal_count 0.
    """

    __tablename__ = "meals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    resident_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("residents.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    meal_count: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("resident_id", "date", name="uq_meals_resident_date"),
        Index("ix_meals_tenant_date", "tenant_id", "date"),
    )
