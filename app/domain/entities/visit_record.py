"""VisitRecord entity — the singleton site-wide visit counter."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class VisitRecord:
    id: str
    visit_count: int
    last_visit: datetime
    last_visitor_ip: str = "unknown"
    created_at: datetime | None = None

    @classmethod
    def first_visit(cls, record_id: str, visitor_ip: str, at: datetime) -> "VisitRecord":
        """Lazily created record: the first increment starts the count at 1."""
        return cls(
            id=record_id,
            visit_count=1,
            last_visit=at,
            last_visitor_ip=visitor_ip,
            created_at=at,
        )

    def register_visit(self, visitor_ip: str, at: datetime) -> None:
        if self.visit_count < 0:
            raise ValueError(f"Corrupt visit count: {self.visit_count}")
        self.visit_count += 1
        self.last_visit = at
        self.last_visitor_ip = visitor_ip

    def is_first_visit(self) -> bool:
        return self.visit_count == 1

    def greeting(self) -> str:
        if self.is_first_visit():
            return "Welcome! You are the first visitor!"
        return f"Thank you for visiting! You are visitor #{self.visit_count}"
