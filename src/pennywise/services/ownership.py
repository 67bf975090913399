"""Owner-scoped fetch, update, and delete shared by the record services."""

from __future__ import annotations

from typing import Any, Mapping, NoReturn, TypeVar

from ..domain.repositories import OwnedRecordRepository
from ..errors import ForbiddenError, NotFoundError

RecordT = TypeVar("RecordT")


def _raise_for_unmatched(repo: OwnedRecordRepository[Any], record_id: int, label: str) -> NoReturn:
    """Explain why an owner-scoped statement touched no rows."""

    if repo.owner_of(record_id) is None:
        raise NotFoundError(f"{label} not found")
    raise ForbiddenError()


def fetch_owned(
    repo: OwnedRecordRepository[RecordT], record_id: int, *, user_id: int, label: str
) -> RecordT:
    """Return the record when it exists and belongs to ``user_id``."""

    record = repo.get_by_id(record_id)
    if record is None:
        raise NotFoundError(f"{label} not found")
    if record.user_id != user_id:  # type: ignore[attr-defined]
        raise ForbiddenError()
    return record


def update_owned(
    repo: OwnedRecordRepository[RecordT],
    record_id: int,
    *,
    user_id: int,
    changes: Mapping[str, Any],
    label: str,
) -> RecordT:
    """Apply ``changes`` in one statement scoped to id and owner."""

    updated = repo.update_owned(record_id, user_id=user_id, changes=changes)
    if updated is None:
        _raise_for_unmatched(repo, record_id, label)
    return updated


def delete_owned(
    repo: OwnedRecordRepository[Any], record_id: int, *, user_id: int, label: str
) -> None:
    """Delete in one statement scoped to id and owner."""

    if not repo.delete_owned(record_id, user_id=user_id):
        _raise_for_unmatched(repo, record_id, label)
