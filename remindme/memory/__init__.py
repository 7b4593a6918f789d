"""
remindme Memory - Reminder Queue

Reminder records, their persistence backends and the store that owns them.
"""

from .reminder_models import (
    Priority,
    Reminder,
    ReminderStatus,
    create_reminder,
    generate_reminder_id,
)
from .reminder_storage import InMemoryStorage, JsonFileStorage, ReminderStoreError
from .reminder_store import LIST_FILTERS, MoveResult, ReminderStore

__all__ = [
    'Priority',
    'Reminder',
    'ReminderStatus',
    'create_reminder',
    'generate_reminder_id',
    'InMemoryStorage',
    'JsonFileStorage',
    'ReminderStoreError',
    'LIST_FILTERS',
    'MoveResult',
    'ReminderStore',
]
