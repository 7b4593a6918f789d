"""
remindme - A reminder queue for notes left across sessions.

Like "remind me..." for an assistant: leave a note, check it next time,
complete it, delete it or move it to permanent notes.
"""

__version__ = "0.1.0"
