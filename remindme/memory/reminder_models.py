"""
remindme Reminder Models

Data structures for the reminder queue.

Records are plain data:
- content and priority are fixed at creation
- only status and the completion timestamp ever change
- serialized form is the JSON record kept on disk
"""

import random
import string
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Priority(Enum):
    """Reminder priority levels"""
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, lower comes first"""
        return PRIORITY_ORDER[self]


PRIORITY_ORDER = {
    Priority.HIGH: 0,
    Priority.NORMAL: 1,
    Priority.LOW: 2,
}


class ReminderStatus(Enum):
    """Reminder lifecycle states"""
    ACTIVE = "active"          # Waiting in the queue
    COMPLETED = "completed"    # Handled by the user
    MOVED = "moved"            # Archived to permanent notes


_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_reminder_id(created: datetime) -> str:
    """
    Build a reminder id from its creation time.

    Format: rem_<epoch millis>_<5 random base36 chars>
    """
    millis = int(created.timestamp() * 1000)
    suffix = ''.join(random.choices(_ID_ALPHABET, k=5))
    return f"rem_{millis}_{suffix}"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z' for UTC"""
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Reminder:
    """
    A single note left for later.

    Fields:
        id: Opaque unique id (see generate_reminder_id)
        content: Free text, never empty
        priority: high / normal / low
        created: Aware datetime, set once
        status: active / completed / moved
        completed: Set once, on active -> completed
    """
    id: str
    content: str
    priority: Priority
    created: datetime
    status: ReminderStatus
    completed: Optional[datetime] = None

    def __post_init__(self):
        """Validate reminder data"""
        if not self.id:
            raise ValueError("Reminder ID cannot be empty")
        if not self.content:
            raise ValueError("Reminder content cannot be empty")
        if not isinstance(self.priority, Priority):
            raise TypeError("priority must be Priority")
        if not isinstance(self.created, datetime):
            raise TypeError("created must be datetime")
        if not isinstance(self.status, ReminderStatus):
            raise TypeError("status must be ReminderStatus")

    @property
    def is_active(self) -> bool:
        return self.status == ReminderStatus.ACTIVE

    def sort_key(self):
        """Priority first (high before low), then oldest first"""
        return (self.priority.rank, self.created)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict"""
        data = {
            'id': self.id,
            'content': self.content,
            'priority': self.priority.value,
            'created': self.created.isoformat(),
            'status': self.status.value,
        }
        if self.completed is not None:
            data['completed'] = self.completed.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Reminder':
        """Create Reminder from dict"""
        completed = data.get('completed')
        return cls(
            id=data['id'],
            content=data['content'],
            priority=Priority(data.get('priority', Priority.NORMAL.value)),
            created=parse_timestamp(data['created']),
            status=ReminderStatus(data['status']),
            completed=parse_timestamp(completed) if completed else None,
        )


def create_reminder(
    content: str,
    created: datetime,
    reminder_id: str,
    priority: Priority = Priority.NORMAL
) -> Reminder:
    """
    Factory function to create a new reminder.

    Args:
        content: What to remember
        created: Creation time (aware datetime)
        reminder_id: Fresh id for the record
        priority: Priority level

    Returns:
        New Reminder in ACTIVE status
    """
    return Reminder(
        id=reminder_id,
        content=content,
        priority=priority,
        created=created,
        status=ReminderStatus.ACTIVE,
    )
