"""Shared SQLModel plumbing for user-owned records."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Generic, Mapping, Optional, TypeVar

from sqlalchemy import delete, update
from sqlmodel import SQLModel, select

from ..database import SessionFactory

ModelT = TypeVar("ModelT", bound=SQLModel)


class SQLModelOwnedRepository(Generic[ModelT]):
    """CRUD for tables that carry ``id`` and an owning ``user_id``.

    Mutations are single statements whose WHERE clause matches both the id and the
    owner, so there is no window between the ownership check and the write.
    """

    model: ClassVar[type[SQLModel]]

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _default_order(self) -> tuple:
        return (self.model.id.desc(),)  # type: ignore[attr-defined]

    def get_by_id(self, record_id: int) -> Optional[ModelT]:
        """Retrieve a record by ID regardless of owner."""
        with self.session_factory() as session:
            obj = session.get(self.model, record_id)
            if obj:
                session.expunge(obj)
            return obj  # type: ignore[return-value]

    def owner_of(self, record_id: int) -> Optional[int]:
        """Return the owning user id, or None when the record does not exist."""
        with self.session_factory() as session:
            return session.exec(
                select(self.model.user_id).where(self.model.id == record_id)  # type: ignore[attr-defined]
            ).first()

    def list_all(self, *, user_id: int) -> list[ModelT]:
        """List every record owned by ``user_id``."""
        with self.session_factory() as session:
            statement = (
                select(self.model)
                .where(self.model.user_id == user_id)  # type: ignore[attr-defined]
                .order_by(*self._default_order())
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows  # type: ignore[return-value]

    def create(self, record: ModelT, *, user_id: int) -> ModelT:
        """Persist a new record owned by ``user_id``."""
        with self.session_factory() as session:
            record.user_id = user_id  # type: ignore[attr-defined]
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
            return record

    def update_owned(
        self, record_id: int, *, user_id: int, changes: Mapping[str, Any]
    ) -> Optional[ModelT]:
        """Apply ``changes`` when the record exists and belongs to ``user_id``.

        Returns the refreshed record, or None when no row matched.
        """
        values = {key: value for key, value in changes.items() if key not in {"id", "user_id"}}
        values["updated_at"] = datetime.now()
        with self.session_factory() as session:
            result = session.connection().execute(
                update(self.model)
                .where(self.model.id == record_id)  # type: ignore[attr-defined]
                .where(self.model.user_id == user_id)  # type: ignore[attr-defined]
                .values(**values)
            )
            if result.rowcount == 0:
                return None
            obj = session.get(self.model, record_id)
            session.expunge(obj)
            return obj  # type: ignore[return-value]

    def delete_owned(self, record_id: int, *, user_id: int) -> bool:
        """Delete the record if it belongs to ``user_id``; report whether a row went."""
        with self.session_factory() as session:
            result = session.connection().execute(
                delete(self.model)
                .where(self.model.id == record_id)  # type: ignore[attr-defined]
                .where(self.model.user_id == user_id)  # type: ignore[attr-defined]
            )
            return result.rowcount > 0
