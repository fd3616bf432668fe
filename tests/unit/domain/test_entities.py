"""Tests for domain entities."""

from datetime import datetime, timezone

import pytest

from app.domain.entities.contact_message import ContactMessage
from app.domain.entities.visit_record import VisitRecord
from app.domain.value_objects.enums import MessageStatus

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
T1 = datetime(2026, 1, 1, 12, 5, tzinfo=timezone.utc)


# ─── VisitRecord ─────────────────────────────────────────────────────


def test_first_visit_starts_at_one():
    record = VisitRecord.first_visit("portfolio-visits", "1.2.3.4", T0)
    assert record.visit_count == 1
    assert record.created_at == T0
    assert record.last_visit == T0
    assert record.last_visitor_ip == "1.2.3.4"
    assert record.is_first_visit()


def test_register_visit_increments_and_stamps():
    record = VisitRecord.first_visit("portfolio-visits", "1.2.3.4", T0)
    record.register_visit("5.6.7.8", T1)
    assert record.visit_count == 2
    assert record.last_visit == T1
    assert record.last_visitor_ip == "5.6.7.8"
    assert record.created_at == T0


def test_register_visit_rejects_negative_count():
    record = VisitRecord(id="x", visit_count=-1, last_visit=T0)
    with pytest.raises(ValueError, match="Corrupt visit count"):
        record.register_visit("unknown", T1)


def test_greeting_first_visitor():
    record = VisitRecord.first_visit("x", "unknown", T0)
    assert record.greeting() == "Welcome! You are the first visitor!"


def test_greeting_later_visitor():
    record = VisitRecord(id="x", visit_count=42, last_visit=T0)
    assert record.greeting() == "Thank you for visiting! You are visitor #42"


# ─── ContactMessage ──────────────────────────────────────────────────


def test_contact_message_defaults():
    msg = ContactMessage(name="A", email="a@b.com", subject="s", message="hi", timestamp=T0)
    assert msg.status == MessageStatus.NEW
    assert msg.status.value == "new"
    assert msg.ip_address == "unknown"
    assert msg.user_agent == "unknown"
    assert msg.id.startswith("msg_")


def test_contact_message_ids_are_unique():
    ids = {
        ContactMessage(name="A", email="a@b.com", subject="s", message="hi", timestamp=T0).id
        for _ in range(50)
    }
    assert len(ids) == 50
