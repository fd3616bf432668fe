"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.adapters.persistence.database import Base
from app.domain.value_objects.limits import ADDRESS_MAX_LENGTH, USER_AGENT_MAX_LENGTH


class VisitRecordModel(Base):
    __tablename__ = "visit_records"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    visit_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_visit: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_visitor_ip: Mapped[str] = mapped_column(
        String(ADDRESS_MAX_LENGTH), nullable=False, default="unknown"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("visit_count >= 0", name="ck_visit_records_count_non_negative"),
    )


class ContactMessageModel(Base):
    __tablename__ = "contact_messages"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    subject: Mapped[str] = mapped_column(String(300), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ip_address: Mapped[str] = mapped_column(
        String(ADDRESS_MAX_LENGTH), nullable=False, default="unknown"
    )
    user_agent: Mapped[str] = mapped_column(
        String(USER_AGENT_MAX_LENGTH), nullable=False, default="unknown"
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new")

    __table_args__ = (
        Index("idx_contact_messages_status", "status"),
        Index("idx_contact_messages_timestamp", "timestamp"),
    )
