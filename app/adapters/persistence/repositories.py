"""SQLAlchemy repository implementations.

Each write is its own unit of work: the repository commits before returning
so write locks are released and the change is durable by the time the
response is built. Sessions handed in are never committed by the caller.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.models import ContactMessageModel, VisitRecordModel
from app.application.ports.contact_repo import ContactRepository
from app.application.ports.visit_repo import VisitRepository
from app.domain.entities.contact_message import ContactMessage
from app.domain.entities.visit_record import VisitRecord
from app.domain.errors import StorageUnavailable
from app.domain.value_objects.enums import MessageStatus

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _storage_errors(session: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Translate driver failures into StorageUnavailable, leaving the session clean."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Storage error during %s", operation)
        try:
            await session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback after %s failed", operation, exc_info=True)
        raise StorageUnavailable() from e


# ─── Mappers ─────────────────────────────────────────────────────────


def _visit_to_domain(m: VisitRecordModel) -> VisitRecord:
    return VisitRecord(
        id=m.id,
        visit_count=m.visit_count,
        last_visit=m.last_visit,
        last_visitor_ip=m.last_visitor_ip,
        created_at=m.created_at,
    )


def _contact_to_domain(m: ContactMessageModel) -> ContactMessage:
    return ContactMessage(
        id=m.id,
        name=m.name,
        email=m.email,
        subject=m.subject,
        message=m.message,
        timestamp=m.timestamp,
        ip_address=m.ip_address,
        user_agent=m.user_agent,
        status=MessageStatus(m.status),
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlVisitRepository(VisitRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get(self, record_id: str) -> VisitRecord | None:
        async with _storage_errors(self._s, "visit read"):
            m = await self._s.get(VisitRecordModel, record_id)
            return _visit_to_domain(m) if m else None

    async def increment(
        self, record_id: str, visitor_ip: str, at: datetime
    ) -> VisitRecord | None:
        async with _storage_errors(self._s, "visit increment"):
            # Single UPDATE ... RETURNING: the store adds one, so concurrent
            # callers never write back the same base value
            result = await self._s.execute(
                update(VisitRecordModel)
                .where(VisitRecordModel.id == record_id)
                .values(
                    visit_count=VisitRecordModel.visit_count + 1,
                    last_visit=at,
                    last_visitor_ip=visitor_ip,
                )
                .returning(VisitRecordModel.visit_count, VisitRecordModel.created_at)
                .execution_options(synchronize_session=False)
            )
            row = result.one_or_none()
            if row is None:
                return None
            await self._s.commit()
            return VisitRecord(
                id=record_id,
                visit_count=row.visit_count,
                last_visit=at,
                last_visitor_ip=visitor_ip,
                created_at=row.created_at,
            )

    async def create(self, record: VisitRecord) -> bool:
        async with _storage_errors(self._s, "visit create"):
            self._s.add(
                VisitRecordModel(
                    id=record.id,
                    visit_count=record.visit_count,
                    last_visit=record.last_visit,
                    last_visitor_ip=record.last_visitor_ip,
                    created_at=record.created_at or record.last_visit,
                )
            )
            try:
                await self._s.commit()
            except IntegrityError:
                await self._s.rollback()
                # Only a taken primary key means a concurrent request won the race
                if await self._s.get(VisitRecordModel, record.id) is None:
                    raise
                return False
            return True


class SqlContactRepository(ContactRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, message: ContactMessage) -> ContactMessage:
        async with _storage_errors(self._s, "contact save"):
            self._s.add(
                ContactMessageModel(
                    id=message.id,
                    name=message.name,
                    email=message.email,
                    subject=message.subject,
                    message=message.message,
                    timestamp=message.timestamp,
                    ip_address=message.ip_address,
                    user_agent=message.user_agent,
                    status=message.status.value,
                )
            )
            await self._s.commit()
            return message

    async def get_by_id(self, message_id: str) -> ContactMessage | None:
        async with _storage_errors(self._s, "contact read"):
            m = await self._s.get(ContactMessageModel, message_id)
            return _contact_to_domain(m) if m else None
