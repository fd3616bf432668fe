"""Port interface for visit counter persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.entities.visit_record import VisitRecord


class VisitRepository(ABC):
    @abstractmethod
    async def get(self, record_id: str) -> VisitRecord | None:
        ...

    @abstractmethod
    async def increment(
        self, record_id: str, visitor_ip: str, at: datetime
    ) -> VisitRecord | None:
        """Atomically add one visit to an existing record and return it.

        Must serialize concurrent callers (row lock, atomic update or
        transaction) so no increment is lost. Returns None if the record
        does not exist yet.
        """
        ...

    @abstractmethod
    async def create(self, record: VisitRecord) -> bool:
        """Insert the initial record.

        Returns False, without raising, if another writer created it first.
        """
        ...
