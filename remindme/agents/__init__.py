"""
remindme Agents - Tool Dispatch Layer

Turns named tool calls into reminder store operations and text replies.
"""

from .reminder_agent import (
    HELP_DOCUMENTATION,
    TOOL_DEFINITIONS,
    ReminderAgent,
    ToolCallError,
)

__all__ = [
    'HELP_DOCUMENTATION',
    'TOOL_DEFINITIONS',
    'ReminderAgent',
    'ToolCallError',
]
