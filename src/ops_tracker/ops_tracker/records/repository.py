from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ProductionRecord


class RecordRepository(Protocol):
    def get_by_id(self, record_id: str) -> Optional[ProductionRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ProductionRecord]:
        raise NotImplementedError

    def create(self, record: ProductionRecord) -> ProductionRecord:
        raise NotImplementedError

    def update(self, record: ProductionRecord) -> bool:
        """Overwrite the stored record with the same id. Last write wins."""

        raise NotImplementedError

    def delete_by_id(self, record_id: str) -> bool:
        raise NotImplementedError

    def delete_by_user(self, user_id: str) -> int:
        raise NotImplementedError
