"""
SQL implementation of the PersistenceClient contract.

Collections map one-to-one onto tables. Rows cross the boundary as plain
field dicts; the remote ledger turns them into records. Every SQLAlchemy
error is rolled back and re-raised as PersistenceFailure.
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from messmate.core.exceptions import PersistenceFailure
from messmate.models.base import Base
from messmate.models.bill_record import BillRow
from messmate.models.market_record import MarketRow
from messmate.models.meal_record import MealRow
from messmate.models.resident import ResidentRow

TABLES: dict[str, type[Base]] = {
    "residents": ResidentRow,
    "meals": MealRow,
    "market": MarketRow,
    "bills": BillRow,
}

# Bookkeeping columns that are not part of the record shape
HIDDEN_COLUMNS = {"created_at", "updated_at"}


class SqlAlchemyPersistenceClient:
    """PersistenceClient over the ledger tables of a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    async def select(self, collection: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        model = self._model(collection)
        try:
            query = self.db.query(model).filter_by(**filters)
            rows = query.order_by(model.created_at, model.id).all()
        except SQLAlchemyError as e:
            raise self._failure("select", collection, e) from e
        return [self._to_fields(row) for row in rows]

    async def insert(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        model = self._model(collection)
        try:
            row = model(**fields)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._failure("insert", collection, e) from e
        return self._to_fields(row)

    async def update(
        self,
        collection: str,
        record_id: str,
        fields: dict[str, Any],
        filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """
        Update a row by id, optionally constrained by extra filters.

        Returns:
            Updated row fields, or None if no matching row exists
        """
        model = self._model(collection)
        try:
            row = self.db.query(model).filter_by(id=record_id, **(filters or {})).first()
            if row is None:
                return None
            for key, value in fields.items():
                setattr(row, key, value)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._failure("update", collection, e) from e
        return self._to_fields(row)

    async def delete(
        self,
        collection: str,
        record_id: str,
        filters: dict[str, Any] | None = None,
        cascade: dict[str, dict[str, Any]] | None = None,
    ) -> bool:
        """
        Delete a row by id, optionally constrained by extra filters.

        Args:
            cascade: Dependent collection -> filters; matching rows are
                removed in the same transaction as the row itself

        Returns:
            True if a row was deleted. Nothing is deleted when it is False.
        """
        model = self._model(collection)
        dependents = [(self._model(name), where) for name, where in (cascade or {}).items()]
        try:
            row = self.db.query(model).filter_by(id=record_id, **(filters or {})).first()
            if row is None:
                return False
            for dependent, where in dependents:
                self.db.query(dependent).filter_by(**where).delete(synchronize_session=False)
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._failure("delete", collection, e) from e
        return True

    def _model(self, collection: str) -> type[Base]:
        try:
            return TABLES[collection]
        except KeyError:
            raise PersistenceFailure(f"Unknown collection '{collection}'")

    def _failure(self, operation: str, collection: str, error: SQLAlchemyError) -> PersistenceFailure:
        self.db.rollback()
        return PersistenceFailure(f"{operation} on {collection} failed: {error}")

    @staticmethod
    def _to_fields(row: Base) -> dict[str, Any]:
        return {
            column.key: getattr(row, column.key)
            for column in row.__table__.columns
            if column.key not in HIDDEN_COLUMNS
        }
