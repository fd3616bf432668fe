"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.adapters.persistence.repositories import SqlContactRepository, SqlVisitRepository
from app.application.ports.contact_repo import ContactRepository
from app.application.ports.visit_repo import VisitRepository
from app.application.use_cases.increment_visits import IncrementVisitCountUseCase
from app.application.use_cases.submit_contact import SubmitContactUseCase
from app.config import settings


def get_visit_repo(session: AsyncSession = Depends(get_session)) -> VisitRepository:
    return SqlVisitRepository(session)


def get_contact_repo(session: AsyncSession = Depends(get_session)) -> ContactRepository:
    return SqlContactRepository(session)


def get_increment_visits_uc(
    visit_repo: VisitRepository = Depends(get_visit_repo),
) -> IncrementVisitCountUseCase:
    return IncrementVisitCountUseCase(
        visit_repo=visit_repo,
        record_id=settings.visit_record_id,
        max_attempts=settings.visit_max_attempts,
        timeout_seconds=settings.store_timeout_seconds,
    )


def get_submit_contact_uc(
    contact_repo: ContactRepository = Depends(get_contact_repo),
) -> SubmitContactUseCase:
    return SubmitContactUseCase(
        contact_repo=contact_repo,
        timeout_seconds=settings.store_timeout_seconds,
    )
