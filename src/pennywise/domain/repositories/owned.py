"""Protocol shared by every user-owned record store."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, TypeVar

RecordT = TypeVar("RecordT")


class OwnedRecordRepository(Protocol[RecordT]):
    """CRUD surface whose mutations are scoped to the owning user."""

    def get_by_id(self, record_id: int) -> Optional[RecordT]:
        """Retrieve a record by ID regardless of owner."""
        ...

    def owner_of(self, record_id: int) -> Optional[int]:
        """Return the owning user id, or None if the record does not exist."""
        ...

    def list_all(self, *, user_id: int) -> list[RecordT]:
        """List the user's records in the store's default order."""
        ...

    def create(self, record: RecordT, *, user_id: int) -> RecordT:
        """Persist a new record for the user."""
        ...

    def update_owned(
        self, record_id: int, *, user_id: int, changes: Mapping[str, Any]
    ) -> Optional[RecordT]:
        """Update in one statement matching id and owner; None if nothing matched."""
        ...

    def delete_owned(self, record_id: int, *, user_id: int) -> bool:
        """Delete in one statement matching id and owner."""
        ...
