from datetime import date
from pydantic import BaseModel


class PeriodResponse(BaseModel):
    model_config = {"from_attributes": True}

    token: str
    label: str
    start: date
    end: date
    days_in_month: int


class ResidentBalanceResponse(BaseModel):
    model_config = {"from_attributes": True}

    resident_id: str
    name: str
    total_meals: int
    total_market: float
    meal_cost: float
    fixed_share: float
    total_deposit: float
    balance: float
    status: str


class MarketSettlementResponse(BaseModel):
    """Monthly report: market spend shared by meals eaten"""

    model_config = {"from_attributes": True}

    period: PeriodResponse
    total_meals: int
    total_market: float
    meal_rate: float
    balances: list[ResidentBalanceResponse]


class FullSettlementResponse(BaseModel):
    """Detailed calculation: market spend plus fixed fee"""

    model_config = {"from_attributes": True}

    period: PeriodResponse
    total_meals: int
    total_market: float
    fixed_fee: float
    total_expense: float
    meal_rate: float
    fixed_share: float
    balances: list[ResidentBalanceResponse]


class ResidentTotalResponse(BaseModel):
    model_config = {"from_attributes": True}

    resident_id: str
    name: str
    value: float


class OverviewResponse(BaseModel):
    model_config = {"from_attributes": True}

    period: PeriodResponse
    total_meals: int
    total_market: float
    total_bills: float
    resident_count: int
    meals_by_resident: list[ResidentTotalResponse]
    market_by_resident: list[ResidentTotalResponse]


class MealGridRowResponse(BaseModel):
    model_config = {"from_attributes": True}

    resident_id: str
    name: str
    counts: list[int]
    total: int


class MealGridResponse(BaseModel):
    model_config = {"from_attributes": True}

    period: PeriodResponse
    days: list[int]
    rows: list[MealGridRowResponse]
    day_totals: list[int]
    total: int
