from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from fifa_league.storage.models import Ban, Finance, Match, MotmAward, Player, Transaction

Record = dict[str, Any]
Selector = int | Mapping[str, Any]

COLLECTIONS = {
    "players": Player,
    "matches": Match,
    "bans": Ban,
    "finances": Finance,
    "transactions": Transaction,
    "motm_awards": MotmAward,
}


class StoreError(RuntimeError):
    """Raised when a call against the record store fails."""

    def __init__(self, operation: str, collection: str, reason: str) -> None:
        super().__init__(f"{operation} on {collection} failed: {reason}")
        self.operation = operation
        self.collection = collection
        self.reason = reason


class LeagueStore:
    """Per-collection CRUD over the league tables.

    Every call runs in its own session and commits on its own, so a sequence
    of calls is visible step by step and never rolled back as a whole.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def select_all(self, collection: str, *, order_by: tuple[str, ...] = ("id",), **filters: Any) -> list[Record]:
        model = _model(collection)
        stmt = select(model).where(*_conditions(model, filters))
        stmt = stmt.order_by(*(_column(model, name) for name in order_by))
        try:
            with self._session_factory() as db:
                return [_to_record(row) for row in db.scalars(stmt).all()]
        except SQLAlchemyError as exc:
            raise StoreError("select", collection, str(exc)) from exc

    def select_one(self, collection: str, **filters: Any) -> Record | None:
        rows = self.select_all(collection, **filters)
        return rows[0] if rows else None

    def get(self, collection: str, record_id: int) -> Record | None:
        return self.select_one(collection, id=record_id)

    def insert(self, collection: str, record: Mapping[str, Any]) -> int:
        model = _model(collection)
        values = {name: _plain(value) for name, value in record.items()}
        for name in values:
            _column(model, name)
        try:
            with self._session_factory() as db:
                result = db.execute(insert(model).values(**values))
                db.commit()
                return int(result.inserted_primary_key[0])
        except SQLAlchemyError as exc:
            raise StoreError("insert", collection, str(exc)) from exc

    def update(self, collection: str, selector: Selector, patch: Mapping[str, Any]) -> int:
        model = _model(collection)
        values = {name: _plain(value) for name, value in patch.items()}
        for name in values:
            _column(model, name)
        stmt = update(model).where(*_conditions(model, _selector(selector))).values(**values)
        try:
            with self._session_factory() as db:
                result = db.execute(stmt)
                db.commit()
                return int(result.rowcount or 0)
        except SQLAlchemyError as exc:
            raise StoreError("update", collection, str(exc)) from exc

    def delete(self, collection: str, selector: Selector) -> int:
        model = _model(collection)
        stmt = delete(model).where(*_conditions(model, _selector(selector)))
        try:
            with self._session_factory() as db:
                result = db.execute(stmt)
                db.commit()
                return int(result.rowcount or 0)
        except SQLAlchemyError as exc:
            raise StoreError("delete", collection, str(exc)) from exc


def _model(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"unknown collection: {collection}") from None


def _column(model, name: str):
    if name not in model.__table__.columns:
        raise ValueError(f"unknown column {name} on {model.__tablename__}")
    return getattr(model, name)


def _selector(selector: Selector) -> Mapping[str, Any]:
    if isinstance(selector, Mapping):
        if not selector:
            raise ValueError("an empty filter would touch every row")
        return selector
    return {"id": selector}


def _conditions(model, filters: Mapping[str, Any]) -> list:
    conditions = []
    for name, value in filters.items():
        column = _column(model, name)
        value = _plain(value)
        conditions.append(column.is_(None) if value is None else column == value)
    return conditions


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _to_record(row) -> Record:
    return {column.name: getattr(row, column.name) for column in row.__table__.columns}
