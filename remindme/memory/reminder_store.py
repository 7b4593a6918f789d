"""
remindme Reminder Store - In-Memory Map Mirrored to Disk

Owns every reminder record. The map is loaded once at startup and written
back in full after each mutation, before the call returns.

Design:
- Not-found and wrong-status are reported through return values, never raised
- Persistence faults are logged; the process keeps running
- Time and id generation are injected so tests can pin them
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .reminder_models import (
    Priority,
    Reminder,
    ReminderStatus,
    create_reminder,
    generate_reminder_id,
)
from .reminder_storage import JsonFileStorage, ReminderStoreError
from remindme.tools.notes_archive import NotesArchive, NotesArchiveError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[datetime], str]

LIST_FILTERS = ('all',) + tuple(p.value for p in Priority)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MoveResult:
    """Outcome of archiving a reminder to permanent notes"""
    success: bool
    message: str


class ReminderStore:
    """
    Reminder queue backed by a single JSON file.

    Storage location: ~/.claude_reminders.json

    Lifecycle:
        active -> completed   (complete)
        active -> moved       (move_to_permanent_storage)
        any    -> removed     (delete, purge_older_than for non-active)
    """

    DEFAULT_STORAGE_FILE = Path.home() / ".claude_reminders.json"

    def __init__(
        self,
        storage=None,
        archive: Optional[NotesArchive] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None
    ):
        """
        Initialize reminder store.

        Args:
            storage: Backend with load()/save() (default: JSON file in home dir)
            archive: Permanent notes sink (default: NotesArchive())
            clock: Returns the current aware datetime (default: UTC now)
            id_factory: Builds an id from a creation time
        """
        self.storage = storage if storage is not None else JsonFileStorage(self.DEFAULT_STORAGE_FILE)
        self.archive = archive if archive is not None else NotesArchive()
        self.clock = clock or utc_now
        self.id_factory = id_factory or generate_reminder_id

        self._reminders: Dict[str, Reminder] = {}
        self._load()

        logger.info(f"ReminderStore initialized with {len(self._reminders)} reminders")

    # -------------------- persistence --------------------

    def _load(self):
        """Fill the in-memory map from storage; start empty on failure"""
        try:
            records = self.storage.load()
        except ReminderStoreError as e:
            logger.error(f"Error loading reminders, starting empty: {e}")
            self._reminders = {}
            return

        for key, record in records.items():
            try:
                reminder = Reminder.from_dict(record)
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping invalid reminder {key}: {e}")
                continue
            if reminder.id != key:
                logger.warning(f"Reminder stored under {key} has id {reminder.id}")
            if reminder.id in self._reminders:
                logger.warning(f"Duplicate reminder id {reminder.id} under {key}, keeping the first")
                continue
            self._reminders[reminder.id] = reminder

    def _persist(self) -> bool:
        """
        Write the full map to storage.

        Returns:
            True if written. On failure the in-memory state is kept as is.
        """
        records = {rid: r.to_dict() for rid, r in self._reminders.items()}
        try:
            self.storage.save(records)
        except ReminderStoreError as e:
            logger.error(f"Error saving reminders: {e}")
            return False
        return True

    def _new_id(self, created: datetime) -> str:
        reminder_id = self.id_factory(created)
        while reminder_id in self._reminders:
            logger.debug(f"Reminder id collision on {reminder_id}, drawing again")
            reminder_id = self.id_factory(created)
        return reminder_id

    # -------------------- operations --------------------

    def add(self, content: str, priority: Union[Priority, str] = Priority.NORMAL) -> str:
        """
        Add a reminder to the queue.

        Args:
            content: What to remember
            priority: Priority or its string value

        Returns:
            The new reminder's id
        """
        priority = Priority(priority)
        created = self.clock()
        reminder = create_reminder(
            content=content,
            created=created,
            reminder_id=self._new_id(created),
            priority=priority,
        )

        self._reminders[reminder.id] = reminder
        self._persist()

        logger.info(f"Added reminder: {reminder.id} [{priority.value}]")
        return reminder.id

    def list(self, filter: str = 'all') -> List[Reminder]:
        """
        Active reminders, high priority first, then oldest first.

        Args:
            filter: 'all' or a priority value

        Returns:
            Sorted list (empty if nothing matches)
        """
        reminders = [r for r in self._reminders.values() if r.is_active]

        if filter != 'all':
            wanted = Priority(filter)
            reminders = [r for r in reminders if r.priority == wanted]

        reminders.sort(key=Reminder.sort_key)

        logger.debug(f"Listed {len(reminders)} reminders (filter={filter})")
        return reminders

    def get(self, reminder_id: str) -> Optional[Reminder]:
        return self._reminders.get(reminder_id)

    def complete(self, reminder_id: str) -> bool:
        """
        Mark an active reminder as completed.

        Returns:
            True if it was active, False if missing or already processed
        """
        reminder = self._reminders.get(reminder_id)
        if not reminder or not reminder.is_active:
            logger.warning(f"Cannot complete: reminder {reminder_id} not found or not active")
            return False

        reminder.status = ReminderStatus.COMPLETED
        reminder.completed = self.clock()
        self._persist()

        logger.info(f"Completed reminder: {reminder_id}")
        return True

    def delete(self, reminder_id: str) -> bool:
        """
        Remove a reminder in any status.

        Returns:
            True if deleted, False if not found
        """
        if reminder_id not in self._reminders:
            logger.warning(f"Reminder {reminder_id} not found for deletion")
            return False

        del self._reminders[reminder_id]
        self._persist()

        logger.info(f"Deleted reminder: {reminder_id}")
        return True

    def move_to_permanent_storage(self, reminder_id: str, note: Optional[str] = None) -> MoveResult:
        """
        Archive an active reminder to the notes folder.

        The record only becomes 'moved' after the note file is written.

        Args:
            reminder_id: Reminder to archive
            note: Optional extra text for the note

        Returns:
            MoveResult with the note filename or the failure reason
        """
        reminder = self._reminders.get(reminder_id)
        if not reminder or not reminder.is_active:
            logger.warning(f"Cannot move: reminder {reminder_id} not found or not active")
            return MoveResult(False, "Reminder not found or already processed")

        moved_at = self.clock()
        filename = f"reminder_{moved_at.date().isoformat()}_{reminder.id}.md"
        document = format_note(reminder, moved_at, note)

        try:
            self.archive.write_note(filename, document)
        except NotesArchiveError as e:
            logger.error(f"Failed to archive reminder {reminder_id}: {e}")
            return MoveResult(False, f"Error moving to notes: {e}")

        reminder.status = ReminderStatus.MOVED
        self._persist()

        logger.info(f"Moved reminder {reminder_id} to notes: {filename}")
        return MoveResult(True, f"Moved to notes: {filename}")

    def purge_older_than(self, days: float = 7) -> int:
        """
        Drop completed/moved reminders created more than `days` ago.

        Active reminders are never purged.

        Returns:
            Number of reminders removed
        """
        now = self.clock()
        try:
            cutoff = now - timedelta(days=days)
        except OverflowError:
            # Window reaches past the datetime range
            cutoff = datetime.min if days > 0 else datetime.max
            cutoff = cutoff.replace(tzinfo=timezone.utc)
        stale = [
            rid for rid, r in self._reminders.items()
            if not r.is_active and r.created <= cutoff
        ]

        for rid in stale:
            del self._reminders[rid]

        if stale:
            self._persist()
            logger.info(f"Purged {len(stale)} reminders older than {days} days")

        return len(stale)

    def get_stats(self) -> dict:
        """
        Get storage statistics.

        Returns:
            Dict with reminder counts by status
        """
        stats = {'total': len(self._reminders)}
        for status in ReminderStatus:
            stats[status.value] = 0
        for reminder in self._reminders.values():
            stats[reminder.status.value] += 1
        return stats


def format_note(reminder: Reminder, moved_at: datetime, note: Optional[str] = None) -> str:
    """Render the markdown document written for an archived reminder"""
    note_block = f"\nNote: {note}" if note else ""
    return (
        f"# Reminder: {reminder.content}\n"
        f"\n"
        f"Created: {reminder.created.isoformat()}\n"
        f"Priority: {reminder.priority.value}\n"
        f"{note_block}\n"
        f"\n"
        f"Moved to notes on: {moved_at.isoformat()}\n"
    )
