import datetime
from sqlalchemy import String, Numeric, ForeignKey, Date, Text, Index
from sqlalchemy.orm import Mapped, mapped_column
from messmate.models.base import Base, TimestampMixin, new_uuid


class MarketRow(Base, TimestampMixin):
    """
    Groceries bought by a resident for the house.

    Several entries per resident per day are allowed.
    """

    __tablename__ = "market"

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
        index=True,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(precision=12, scale=2, asdecimal=False), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (Index("ix_market_tenant_date", "tenant_id", "date"),)
