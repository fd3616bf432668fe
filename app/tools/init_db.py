"""Create the portfolio tables and inspect the visit counter.

Usage:
    python -m app.tools.init_db
    python -m app.tools.init_db --drop   # drop existing tables first
    python -m app.tools.init_db --show   # only print the current count
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from app.adapters.persistence.database import Base, async_session_factory, engine
from app.adapters.persistence.models import ContactMessageModel, VisitRecordModel  # noqa: F401
from app.adapters.persistence.repositories import SqlVisitRepository
from app.config import settings

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def create_schema(drop: bool = False) -> None:
    async with engine.begin() as conn:
        if drop:
            logger.info("Dropping existing tables")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


async def show_status() -> dict:
    async with async_session_factory() as session:
        record = await SqlVisitRepository(session).get(settings.visit_record_id)
        messages = (
            await session.execute(select(func.count(ContactMessageModel.id)))
        ).scalar() or 0

    status = {
        "record_id": settings.visit_record_id,
        "visit_count": record.visit_count if record else 0,
        "last_visit": record.last_visit.isoformat() if record else None,
        "contact_messages": messages,
    }
    print(f"\n{'='*50}")
    for key, value in status.items():
        print(f"{key:>18}: {value}")
    print(f"{'='*50}\n")
    return status


def main():
    parser = argparse.ArgumentParser(description="Initialize the portfolio database")
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing tables before creating them",
    )
    parser.add_argument(
        "--show", action="store_true",
        help="Only print the current visit count, don't touch the schema",
    )
    args = parser.parse_args()

    async def run_all():
        try:
            if not args.show:
                await create_schema(drop=args.drop)
            await show_status()
        finally:
            await engine.dispose()

    try:
        asyncio.run(run_all())
    except SQLAlchemyError as e:
        logger.error("Database error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
