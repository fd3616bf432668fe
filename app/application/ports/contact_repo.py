"""Port interface for contact message persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.contact_message import ContactMessage


class ContactRepository(ABC):
    @abstractmethod
    async def save(self, message: ContactMessage) -> ContactMessage:
        ...

    @abstractmethod
    async def get_by_id(self, message_id: str) -> ContactMessage | None:
        ...
