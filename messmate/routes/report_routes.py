from typing import Optional
from fastapi import APIRouter, Depends, Query

from messmate.core.period import Period
from messmate.dependencies import get_record_repository
from messmate.repositories.record_repository import RecordRepository
from messmate.schemas.ledger_schemas import BillListResponse
from messmate.schemas.report_schemas import (
    FullSettlementResponse,
    MarketSettlementResponse,
    MealGridResponse,
    OverviewResponse,
)
from messmate.services.reconciliation import (
    filter_period,
    settle_market_only,
    settle_with_fixed_fee,
)
from messmate.services.summaries import build_meal_grid, summarize_period

router = APIRouter()


def selected_period(
    month: Optional[str] = Query(None, description="Month as YYYY-MM (default: current month)"),
) -> Period:
    """Parse the month selector; invalid tokens raise ValidationException (400)."""
    return Period.parse(month) if month else Period.current()


@router.get("/overview", response_model=OverviewResponse)
async def overview(
    period: Period = Depends(selected_period),
    repository: RecordRepository = Depends(get_record_repository),
):
    """Month totals with per-resident meal and market breakdowns"""
    ledger = filter_period(repository.snapshot, period)
    return OverviewResponse.model_validate(summarize_period(ledger))


@router.get("/meal-grid", response_model=MealGridResponse)
async def meal_grid(
    period: Period = Depends(selected_period),
    repository: RecordRepository = Depends(get_record_repository),
):
    """Resident x day meal counts with row and day totals"""
    ledger = filter_period(repository.snapshot, period)
    return MealGridResponse.model_validate(build_meal_grid(ledger))


@router.get("/monthly", response_model=MarketSettlementResponse)
async def monthly_report(
    period: Period = Depends(selected_period),
    repository: RecordRepository = Depends(get_record_repository),
):
    """
    Monthly report.

    Meal rate = market spend / meals. Fixed fees are not part of this report.
    """
    ledger = filter_period(repository.snapshot, period)
    return MarketSettlementResponse.model_validate(settle_market_only(ledger))


@router.get("/calculation", response_model=FullSettlementResponse)
async def calculation(
    period: Period = Depends(selected_period),
    fixed_fee: Optional[float] = Query(
        None, ge=0, description="Fixed fee to share (default: the month's bill total)"
    ),
    repository: RecordRepository = Depends(get_record_repository),
):
    """
    Detailed calculation.

    Meal rate = (market spend + fixed fee) / meals; the fixed fee is also
    credited to every resident in equal shares, so balances sum to zero.
    """
    ledger = filter_period(repository.snapshot, period)
    fee = ledger.total_bills if fixed_fee is None else fixed_fee
    return FullSettlementResponse.model_validate(settle_with_fixed_fee(ledger, fee))


@router.get("/bills", response_model=BillListResponse)
async def monthly_bills(
    period: Period = Depends(selected_period),
    repository: RecordRepository = Depends(get_record_repository),
):
    """Bills dated in the month and their total"""
    ledger = filter_period(repository.snapshot, period)
    return BillListResponse(month=period.token, bills=ledger.bills, total_amount=ledger.total_bills)
