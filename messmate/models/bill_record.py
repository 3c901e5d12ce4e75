import datetime
from sqlalchemy import String, Numeric, ForeignKey, Date, Index
from sqlalchemy.orm import Mapped, mapped_column
from messmate.models.base import Base, TimestampMixin, new_uuid


class BillRow(Base, TimestampMixin):
    """Shared household bill (not tied to a resident)"""

    __tablename__ = "bills"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(precision=12, scale=2, asdecimal=False), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    __table_args__ = (Index("ix_bills_tenant_date", "tenant_id", "date"),)
