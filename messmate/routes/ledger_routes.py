from fastapi import APIRouter, Depends, Query, status

from messmate.config import settings
from messmate.dependencies import get_record_repository
from messmate.repositories.record_repository import RecordRepository
from messmate.schemas.ledger_schemas import (
    BillCreate,
    LedgerResponse,
    MarketListResponse,
    MarketRecordCreate,
    MealCountUpdate,
    ResidentCreate,
)

router = APIRouter()

# Mutations answer with the ledger held after the call. An abandoned remote
# write (no group, backend failure) leaves it unchanged.


@router.get("", response_model=LedgerResponse)
async def get_ledger(repository: RecordRepository = Depends(get_record_repository)):
    """Get residents, meals, market entries and bills"""
    return LedgerResponse.model_validate(repository)


@router.post("/residents", response_model=LedgerResponse, status_code=status.HTTP_201_CREATED)
async def add_resident(
    data: ResidentCreate, repository: RecordRepository = Depends(get_record_repository)
):
    """Add a resident (join date defaults to today)"""
    await repository.add_resident(data.name, data.join_date)
    return LedgerResponse.model_validate(repository)


@router.delete("/residents/{resident_id}", response_model=LedgerResponse)
async def delete_resident(
    resident_id: str, repository: RecordRepository = Depends(get_record_repository)
):
    """Delete a resident and all of its meal and market records"""
    await repository.delete_resident(resident_id)
    return LedgerResponse.model_validate(repository)


@router.put("/meals", response_model=LedgerResponse)
async def set_meal_count(
    data: MealCountUpdate, repository: RecordRepository = Depends(get_record_repository)
):
    """
    Set a resident's meal count for a day.

    - Creates the day's record, updates it, or deletes it when the count is 0
    - Setting 0 on a day with no record does nothing
    """
    await repository.set_meal_count(data.resident_id, data.date, data.meal_count)
    return LedgerResponse.model_validate(repository)


@router.post("/market", response_model=LedgerResponse, status_code=status.HTTP_201_CREATED)
async def add_market_record(
    data: MarketRecordCreate, repository: RecordRepository = Depends(get_record_repository)
):
    """Log a market purchase"""
    await repository.add_market_record(data.resident_id, data.date, data.amount, data.description)
    return LedgerResponse.model_validate(repository)


@router.get("/market/recent", response_model=MarketListResponse)
async def recent_market(
    limit: int = Query(settings.RECENT_MARKET_LIMIT, ge=1, le=100, description="Max results"),
    repository: RecordRepository = Depends(get_record_repository),
):
    """Newest market entries first"""
    market = repository.recent_market(limit)
    return MarketListResponse(market=market, total=len(repository.market))


@router.delete("/market/{record_id}", response_model=LedgerResponse)
async def delete_market_record(
    record_id: str, repository: RecordRepository = Depends(get_record_repository)
):
    """Delete a market entry"""
    await repository.delete_market_record(record_id)
    return LedgerResponse.model_validate(repository)


@router.post("/bills", response_model=LedgerResponse, status_code=status.HTTP_201_CREATED)
async def add_bill(data: BillCreate, repository: RecordRepository = Depends(get_record_repository)):
    """Add a shared bill"""
    await repository.add_bill(data.name, data.amount, data.date)
    return LedgerResponse.model_validate(repository)


@router.delete("/bills/{bill_id}", response_model=LedgerResponse)
async def delete_bill(bill_id: str, repository: RecordRepository = Depends(get_record_repository)):
    """Delete a shared bill"""
    await repository.delete_bill(bill_id)
    return LedgerResponse.model_validate(repository)
