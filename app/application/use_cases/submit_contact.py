"""SubmitContactUseCase — validate and store a contact form message."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from app.application.ports.contact_repo import ContactRepository
from app.domain.entities.contact_message import ContactMessage
from app.domain.errors import StorageUnavailable
from app.domain.policies.contact_validation import validate_contact
from app.domain.value_objects.limits import ADDRESS_MAX_LENGTH, USER_AGENT_MAX_LENGTH
from app.domain.value_objects.timestamps import utc_now

logger = logging.getLogger(__name__)


class SubmitContactUseCase:
    """Orchestrates validation and persistence of one contact message."""

    def __init__(
        self,
        contact_repo: ContactRepository,
        timeout_seconds: float = 8.0,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._contacts = contact_repo
        self._timeout = timeout_seconds
        self._clock = clock

    async def execute(
        self,
        payload: Any,
        ip_address: str = "unknown",
        user_agent: str = "unknown",
    ) -> ContactMessage:
        """Store a new message; every call gets a fresh id (no deduplication).

        Raises:
            InvalidInput: a required field is missing or malformed.
            StorageUnavailable: store failed or did not answer in time.
        """
        data = validate_contact(payload)

        message = ContactMessage(
            name=data.name,
            email=data.email,
            subject=data.subject,
            message=data.message,
            timestamp=self._clock(),
            ip_address=(ip_address or "unknown")[:ADDRESS_MAX_LENGTH],
            user_agent=(user_agent or "unknown")[:USER_AGENT_MAX_LENGTH],
        )

        try:
            saved = await asyncio.wait_for(
                self._contacts.save(message), timeout=self._timeout
            )
        except asyncio.TimeoutError as e:
            logger.error("Saving contact message %s timed out", message.id)
            raise StorageUnavailable("Contact store timed out") from e

        logger.info(
            "New contact message received: id=%s name=%s email=%s timestamp=%s",
            saved.id, saved.name, saved.email, saved.timestamp.isoformat(),
        )
        return saved
