"""
remindme Tools - External Sinks

Destinations outside the reminder file, currently the permanent notes folder.
"""

from .notes_archive import (
    NotesArchive,
    NotesArchiveError,
    InvalidNoteNameError,
)

__all__ = [
    'NotesArchive',
    'NotesArchiveError',
    'InvalidNoteNameError',
]
