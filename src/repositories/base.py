"""Generic persistence scaffold for entity repositories."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

RowModelT = TypeVar("RowModelT")
DomainT = TypeVar("DomainT")


def now_millis(now: datetime | None = None) -> int:
    moment = now or datetime.now(UTC)
    return int(moment.timestamp() * 1000)


class BaseEntityRepository(Generic[RowModelT, DomainT]):
    """Reusable read/write operations shared by the entity tables."""

    def __init__(
        self,
        *,
        row_model: type[RowModelT],
        to_domain: Callable[[RowModelT], DomainT],
        to_row_fields: Callable[[DomainT], dict[str, Any]],
        order_column: str = "id",
    ) -> None:
        self.row_model = row_model
        self.to_domain = to_domain
        self.to_row_fields = to_row_fields
        self.order_column = order_column

    def allocate_id(self, session: Session, *, now: datetime | None = None) -> int:
        """Creation-time millisecond id, bumped past the current maximum to stay unique."""
        id_column = getattr(self.row_model, "id")
        current_max = session.scalar(select(func.max(id_column)))
        candidate = now_millis(now)
        if current_max is not None and candidate <= int(current_max):
            candidate = int(current_max) + 1
        return candidate

    def fetch_all(self, session: Session) -> list[DomainT]:
        order_column = getattr(self.row_model, self.order_column)
        id_column = getattr(self.row_model, "id")
        rows = session.execute(select(self.row_model).order_by(order_column, id_column)).scalars().all()
        return [self.to_domain(row) for row in rows]

    def get_row(self, session: Session, entity_id: int) -> RowModelT | None:
        return session.get(self.row_model, entity_id)

    def get(self, session: Session, entity_id: int) -> DomainT | None:
        row = self.get_row(session, entity_id)
        return None if row is None else self.to_domain(row)

    def add(self, session: Session, entity: DomainT) -> DomainT:
        row = self.row_model(**self.to_row_fields(entity))  # type: ignore[call-arg]
        session.add(row)
        session.flush()
        return self.to_domain(row)

    def update(self, session: Session, entity: DomainT) -> DomainT | None:
        fields = self.to_row_fields(entity)
        row = self.get_row(session, fields["id"])
        if row is None:
            return None
        for key, value in fields.items():
            if key != "id":
                setattr(row, key, value)
        session.flush()
        return self.to_domain(row)

    def delete(self, session: Session, entity_id: int) -> bool:
        row = self.get_row(session, entity_id)
        if row is None:
            return False
        session.delete(row)
        session.flush()
        return True

    def count(self, session: Session) -> int:
        id_column = getattr(self.row_model, "id")
        return int(session.scalar(select(func.count(id_column))) or 0)
