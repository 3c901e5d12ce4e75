import datetime
from pydantic import BaseModel, Field, field_validator

from messmate.ledger.records import BillRecord, MarketRecord, MealRecord, Resident
from messmate.ledger.store import LedgerMode


class ResidentCreate(BaseModel):
    """Schema for adding a resident"""

    name: str = Field(..., min_length=1, max_length=255)
    join_date: datetime.date | None = Field(None, description="Defaults to today")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class MealCountUpdate(BaseModel):
    """Schema for setting one resident's meals on one day (0 clears the day)"""

    resident_id: str = Field(..., min_length=1)
    date: datetime.date
    meal_count: int = Field(..., ge=0)


class MarketRecordCreate(BaseModel):
    """Schema for logging a market purchase"""

    resident_id: str = Field(..., min_length=1)
    date: datetime.date
    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=1000)

    @field_validator("description")
    @classmethod
    def strip_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Description must not be blank")
        return value


class BillCreate(BaseModel):
    """Schema for adding a shared bill"""

    name: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    date: datetime.date

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class LedgerResponse(BaseModel):
    """Full ledger as held by the repository after the request"""

    model_config = {"from_attributes": True}

    mode: LedgerMode
    residents: list[Resident]
    meals: list[MealRecord]
    market: list[MarketRecord]
    bills: list[BillRecord]


class MarketListResponse(BaseModel):
    market: list[MarketRecord]
    total: int


class BillListResponse(BaseModel):
    month: str
    bills: list[BillRecord]
    total_amount: float


class GuestSessionResponse(BaseModel):
    """Newly started guest session"""

    session_id: str
    ledger: LedgerResponse
