"""ContactMessage entity — one submission of the site's contact form."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from app.domain.value_objects.enums import MessageStatus


def new_message_id() -> str:
    return f"msg_{uuid.uuid4().hex}"


@dataclass
class ContactMessage:
    name: str
    email: str
    subject: str
    message: str
    timestamp: datetime
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    status: MessageStatus = MessageStatus.NEW
    id: str = field(default_factory=new_message_id)
