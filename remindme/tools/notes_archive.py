"""
remindme Notes Archive - Permanent Notes Sink

Reminders worth keeping are written out as markdown files in a notes
directory (an Obsidian vault folder by default).

The archive may ONLY:
- Create the notes directory if it is missing
- Write .md files directly inside that directory

Filenames with path separators or parent references are rejected.
"""

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class NotesArchiveError(Exception):
    """Base exception for notes archive errors"""
    pass


class InvalidNoteNameError(NotesArchiveError):
    """Raised when a note filename would escape the notes directory"""
    pass


NOTE_EXTENSION = ".md"


def validate_note_name(filename: str) -> str:
    """
    Check that a note filename is a plain markdown file name.

    Raises:
        InvalidNoteNameError: On separators, parent references or wrong extension
    """
    if not filename or '/' in filename or '\\' in filename or '..' in filename:
        raise InvalidNoteNameError(f"Invalid note filename: {filename!r}")
    if not filename.lower().endswith(NOTE_EXTENSION):
        raise InvalidNoteNameError(
            f"Note filename must end with {NOTE_EXTENSION}: {filename!r}"
        )
    return filename


class NotesArchive:
    """Directory-backed destination for archived reminders."""

    DEFAULT_NOTES_DIR = Path.home() / "Documents" / "Obsidian" / "Brain" / "Reminders"

    def __init__(self, notes_dir: Optional[Path] = None):
        """
        Args:
            notes_dir: Target directory (default: ~/Documents/Obsidian/Brain/Reminders)
        """
        self.notes_dir = Path(notes_dir) if notes_dir else self.DEFAULT_NOTES_DIR

    def ensure_notes_dir(self):
        """Create the notes directory (and parents) if it doesn't exist"""
        if not self.notes_dir.exists():
            logger.info(f"Creating notes directory: {self.notes_dir}")
        self.notes_dir.mkdir(parents=True, exist_ok=True)

    def write_note(self, filename: str, content: str) -> Path:
        """
        Write one note file.

        Args:
            filename: Bare file name, e.g. reminder_2024-01-31_rem_1_abcde.md
            content: Markdown text

        Returns:
            Path of the written file

        Raises:
            InvalidNoteNameError: If filename is not a plain .md name
            NotesArchiveError: If the directory or file cannot be written
        """
        validate_note_name(filename)

        # Encode before touching the disk so bad text leaves no empty file
        try:
            data = content.encode('utf-8')
        except UnicodeEncodeError as e:
            logger.error(f"Cannot encode note {filename}: {e}")
            raise NotesArchiveError(f"Cannot encode note {filename}: {e}") from e

        try:
            self.ensure_notes_dir()
            note_path = self.notes_dir / filename
            note_path.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to write note {filename}: {e}")
            raise NotesArchiveError(f"Cannot write note {filename}: {e}") from e

        logger.info(f"Wrote note: {note_path} ({len(content)} chars)")
        return note_path
