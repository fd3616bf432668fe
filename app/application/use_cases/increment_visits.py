"""IncrementVisitCountUseCase — count one more visit to the site."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from app.application.ports.visit_repo import VisitRepository
from app.domain.entities.visit_record import VisitRecord
from app.domain.errors import StorageConflict, StorageUnavailable
from app.domain.value_objects.limits import ADDRESS_MAX_LENGTH
from app.domain.value_objects.timestamps import utc_now

logger = logging.getLogger(__name__)


class IncrementVisitCountUseCase:
    """Increment the singleton VisitRecord without losing concurrent updates."""

    def __init__(
        self,
        visit_repo: VisitRepository,
        record_id: str = "portfolio-visits",
        max_attempts: int = 5,
        timeout_seconds: float = 8.0,
        clock: Callable[[], datetime] = utc_now,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._visits = visit_repo
        self._record_id = record_id
        self._max_attempts = max_attempts
        self._timeout = timeout_seconds
        self._clock = clock

    async def execute(self, visitor_ip: str = "unknown") -> VisitRecord:
        """Add one visit and return the updated record.

        Raises:
            StorageUnavailable: store failed or did not answer in time.
            StorageConflict: the lazy creation race was lost on every attempt.
        """
        visitor_ip = (visitor_ip or "unknown")[:ADDRESS_MAX_LENGTH]
        try:
            return await asyncio.wait_for(
                self._increment(visitor_ip), timeout=self._timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "Visit increment timed out after %.1fs (record=%s)",
                self._timeout, self._record_id,
            )
            raise StorageUnavailable("Visit store timed out") from e

    async def _increment(self, visitor_ip: str) -> VisitRecord:
        for attempt in range(1, self._max_attempts + 1):
            at = self._clock()

            # Existing record: the repository serializes concurrent increments
            record = await self._visits.increment(self._record_id, visitor_ip, at)
            if record is not None:
                logger.debug("Visit #%d recorded from %s", record.visit_count, visitor_ip)
                return record

            # Absent: try to create it; another request may beat us to it
            record = VisitRecord.first_visit(self._record_id, visitor_ip, at)
            if await self._visits.create(record):
                logger.info("Created visit record %s", self._record_id)
                return record

            logger.warning(
                "Visit record %s created concurrently, retrying (attempt %d/%d)",
                self._record_id, attempt, self._max_attempts,
            )

        raise StorageConflict(
            f"Could not update visit record after {self._max_attempts} attempts"
        )
