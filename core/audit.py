"""Audit trail for admin edits to the requirement catalog."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List


@dataclass
class AuditEntry:
    user: str
    requirement_id: str
    field: str
    old_value: Any
    new_value: Any
    timestamp: datetime


class AuditLog:
    """In-memory audit log kept for the admin session."""

    def __init__(self) -> None:
        self.entries: List[AuditEntry] = []

    def record(self, user: str, requirement_id: str, field: str, old_value: Any, new_value: Any) -> None:
        """Record a change to one field of one requirement."""
        self.entries.append(
            AuditEntry(
                user=user,
                requirement_id=requirement_id,
                field=field,
                old_value=old_value,
                new_value=new_value,
                timestamp=datetime.now(timezone.utc),
            )
        )

    def for_requirement(self, requirement_id: str) -> List[AuditEntry]:
        return [e for e in self.entries if e.requirement_id == requirement_id]

    def as_dict(self) -> List[dict]:
        return [
            {
                "user": e.user,
                "requirement": e.requirement_id,
                "field": e.field,
                "old": e.old_value,
                "new": e.new_value,
                "timestamp": e.timestamp.isoformat(),
            }
            for e in self.entries
        ]
