"""
remindme Reminder Storage - Persistence Backends

The store keeps the whole reminder map in memory and hands it to a backend
after every mutation. Backends only move a dict of id -> record in and out:

- JsonFileStorage: one pretty-printed JSON object on disk
- InMemoryStorage: a dict held in memory, for tests

No locking. One process is expected to own the file.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

RecordMap = Dict[str, dict]


class ReminderStoreError(Exception):
    """Base exception for reminder storage errors"""
    pass


class JsonFileStorage:
    """
    File-backed storage using a single JSON object.

    The user can inspect and edit the file by hand. A missing file is an
    empty store; a corrupted file is set aside as <name>.bak.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> RecordMap:
        """
        Read all records from disk.

        Returns:
            Dict of reminder id -> record dict ({} if the file is missing)

        Raises:
            ReminderStoreError: If the file is unreadable or corrupted
        """
        if not self.path.exists():
            logger.info(f"No reminder file at {self.path}, starting empty")
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Corrupted JSON in reminder storage: {e}")
            self._backup_corrupted()
            raise ReminderStoreError(f"Corrupted reminder file: {e}") from e
        except OSError as e:
            raise ReminderStoreError(f"Cannot read reminders: {e}") from e

        if not isinstance(data, dict):
            logger.error(f"Reminder file holds {type(data).__name__}, expected object")
            self._backup_corrupted()
            raise ReminderStoreError("Reminder file must contain a JSON object")

        return data

    def save(self, records: RecordMap) -> None:
        """
        Write all records to disk, replacing the previous file.

        Raises:
            ReminderStoreError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            # Write atomically (write to temp, then rename)
            temp_path = self.path.with_suffix(self.path.suffix + '.tmp')
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2)
            temp_path.replace(self.path)

            logger.debug(f"Saved {len(records)} reminders to {self.path}")

        except OSError as e:
            raise ReminderStoreError(f"Cannot save reminders: {e}") from e

    def _backup_corrupted(self):
        """Rename the unreadable file so the next save does not overwrite it"""
        backup_path = self.path.with_suffix(self.path.suffix + '.bak')
        try:
            self.path.replace(backup_path)
            logger.warning(f"Backed up corrupted storage to: {backup_path}")
        except OSError as e:
            logger.error(f"Failed to back up corrupted storage: {e}")


class InMemoryStorage:
    """
    Storage that never touches the disk.

    Keeps a deep copy of whatever was last saved, so tests can check the
    persisted form independently of the live objects. Set fail_saves to
    simulate an unwritable disk.
    """

    def __init__(self, initial: Optional[RecordMap] = None):
        self.records: RecordMap = copy.deepcopy(initial) if initial else {}
        self.fail_saves = False
        self.save_count = 0

    def load(self) -> RecordMap:
        return copy.deepcopy(self.records)

    def save(self, records: RecordMap) -> None:
        if self.fail_saves:
            raise ReminderStoreError("Cannot save reminders: storage is read-only")
        self.records = copy.deepcopy(records)
        self.save_count += 1
