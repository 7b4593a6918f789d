"""
remindme Reminder Agent - Tool Dispatch

Responsibilities:
- Expose the reminder tools by name (remind_me, check_reminders, ...)
- Validate tool arguments
- Call exactly one ReminderStore operation per tool call
- Render the outcome as text

Failures come back as text prefixed with "Error:"; nothing is raised to
the caller.
"""

import copy
import logging
from typing import Any, Callable, Dict, List, Optional

from remindme.memory.reminder_models import Priority, Reminder
from remindme.memory.reminder_store import LIST_FILTERS, ReminderStore

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised when a tool call has missing or malformed arguments"""
    pass


HELP_DOCUMENTATION = """
# Reminders

A simple reminder queue - like "remind me..." but across sessions.
Leave notes for yourself, check them when you start, act on them or save them.

## Available Functions:

### remind_me(reminder, priority?)
Add a reminder to the queue.
- reminder: What to remember
- priority: "high", "normal", "low" (default: "normal")
Returns: Reminder ID

### check_reminders(filter?)
Check your reminders.
- filter: Optional - "all", "high", "normal", "low" (default: "all")
Returns: List of reminders sorted by priority and time

### complete_reminder(id)
Mark a reminder as completed/handled.
- id: Reminder ID
Returns: Confirmation

### delete_reminder(id)
Delete a reminder without completing it.
- id: Reminder ID
Returns: Confirmation

### move_to_notes(id, note?)
Move a reminder to permanent notes.
- id: Reminder ID
- note: Optional additional note
Returns: Confirmation

### clear_old_reminders(days?)
Clear completed/moved reminders older than N days.
- days: Number of days (default: 7)
Returns: Number cleared

### help()
Show this documentation.

## Usage Pattern:
1. Start session: check_reminders()
2. See what needs attention
3. Work on items, then complete_reminder(id)
4. Important items: move_to_notes(id)
5. Clean up: clear_old_reminders()

## Examples:
- remind_me("Test the new integration", "high")
- remind_me("Look into why the restart lost context")
- check_reminders("high")
- complete_reminder("rem_12345")
"""

_ID_SCHEMA = {'type': 'string', 'description': 'Reminder ID'}

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        'name': 'remind_me',
        'description': 'Add a reminder',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'reminder': {'type': 'string', 'description': 'What to remember'},
                'priority': {
                    'type': 'string',
                    'enum': [p.value for p in Priority],
                    'description': 'Priority level (default: normal)',
                },
            },
            'required': ['reminder'],
        },
    },
    {
        'name': 'check_reminders',
        'description': 'Check your reminders',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'filter': {
                    'type': 'string',
                    'enum': list(LIST_FILTERS),
                    'description': 'Filter by priority (default: all)',
                },
            },
        },
    },
    {
        'name': 'complete_reminder',
        'description': 'Mark a reminder as completed',
        'inputSchema': {
            'type': 'object',
            'properties': {'id': _ID_SCHEMA},
            'required': ['id'],
        },
    },
    {
        'name': 'delete_reminder',
        'description': 'Delete a reminder',
        'inputSchema': {
            'type': 'object',
            'properties': {'id': _ID_SCHEMA},
            'required': ['id'],
        },
    },
    {
        'name': 'move_to_notes',
        'description': 'Move reminder to permanent notes',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'id': _ID_SCHEMA,
                'note': {'type': 'string', 'description': 'Additional note (optional)'},
            },
            'required': ['id'],
        },
    },
    {
        'name': 'clear_old_reminders',
        'description': 'Clear old completed/moved reminders',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'days': {
                    'type': 'number',
                    'description': 'Clear items older than N days (default: 7)',
                },
            },
        },
    },
    {
        'name': 'help',
        'description': 'Get help on using reminders',
        'inputSchema': {'type': 'object', 'properties': {}},
    },
]


# ============================================================================
# ARGUMENT HELPERS
# ============================================================================

def _require_string(args: Dict[str, Any], key: str) -> str:
    if key not in args or args[key] is None:
        raise ToolCallError(f"Missing required argument: {key}")
    value = args[key]
    if not isinstance(value, str):
        raise ToolCallError(f"Argument '{key}' must be a string")
    return value


def _optional_string(args: Dict[str, Any], key: str) -> Optional[str]:
    value = args.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ToolCallError(f"Argument '{key}' must be a string")
    return value


def _optional_choice(args: Dict[str, Any], key: str, choices, default: str) -> str:
    value = _optional_string(args, key)
    if value is None:
        return default
    if value not in choices:
        raise ToolCallError(
            f"Argument '{key}' must be one of: {', '.join(choices)} (got '{value}')"
        )
    return value


def format_reminder_line(reminder: Reminder) -> str:
    """One reminder as shown by check_reminders"""
    return (
        f"[{reminder.priority.value.upper()}] {reminder.id}: {reminder.content}\n"
        f"  Created: {reminder.created.isoformat()}"
    )


class ReminderAgent:
    """
    Maps tool names to ReminderStore calls and formats the replies.

    Holds no state of its own; the store owns every record.
    """

    DEFAULT_PURGE_DAYS = 7

    def __init__(self, store: ReminderStore):
        """
        Initialize reminder agent.

        Args:
            store: ReminderStore instance for persistence
        """
        self.store = store
        self._handlers: Dict[str, Callable[[Dict[str, Any]], str]] = {
            'remind_me': self._remind_me,
            'check_reminders': self._check_reminders,
            'complete_reminder': self._complete_reminder,
            'delete_reminder': self._delete_reminder,
            'move_to_notes': self._move_to_notes,
            'clear_old_reminders': self._clear_old_reminders,
            'help': self._help,
        }
        logger.info("ReminderAgent initialized")

    def list_tools(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(TOOL_DEFINITIONS)

    def handle(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """
        Run one tool call.

        Args:
            name: Tool name
            arguments: Named arguments (may be None)

        Returns:
            Text reply; failures are prefixed with "Error:"
        """
        handler = self._handlers.get(name)

        try:
            if handler is None:
                raise ToolCallError(f"Unknown tool: {name}")
            if arguments is None:
                arguments = {}
            if not isinstance(arguments, dict):
                raise ToolCallError("Arguments must be an object")

            return handler(arguments)

        except ToolCallError as e:
            logger.warning(f"Rejected tool call {name}: {e}")
            return f"Error: {e}"
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}", exc_info=True)
            return f"Error: {e}"

    # -------------------- tools --------------------

    def _remind_me(self, args: Dict[str, Any]) -> str:
        content = _require_string(args, 'reminder').strip()
        if not content:
            raise ToolCallError("Reminder text cannot be empty")
        priority = _optional_choice(
            args, 'priority', [p.value for p in Priority], Priority.NORMAL.value
        )

        reminder_id = self.store.add(content, priority)
        return f"Reminder added: {reminder_id}"

    def _check_reminders(self, args: Dict[str, Any]) -> str:
        filter_value = _optional_choice(args, 'filter', LIST_FILTERS, 'all')

        items = self.store.list(filter_value)
        if not items:
            return "No active reminders."

        formatted = "\n\n".join(format_reminder_line(r) for r in items)
        return f"Active reminders:\n\n{formatted}"

    def _complete_reminder(self, args: Dict[str, Any]) -> str:
        reminder_id = _require_string(args, 'id')
        if self.store.complete(reminder_id):
            return f"Reminder {reminder_id} marked as completed."
        return f"Reminder {reminder_id} not found."

    def _delete_reminder(self, args: Dict[str, Any]) -> str:
        reminder_id = _require_string(args, 'id')
        if self.store.delete(reminder_id):
            return f"Reminder {reminder_id} deleted."
        return f"Reminder {reminder_id} not found."

    def _move_to_notes(self, args: Dict[str, Any]) -> str:
        reminder_id = _require_string(args, 'id')
        note = _optional_string(args, 'note')
        if note is not None:
            note = note.strip() or None

        result = self.store.move_to_permanent_storage(reminder_id, note)
        return result.message

    def _clear_old_reminders(self, args: Dict[str, Any]) -> str:
        days = args.get('days')
        if days is None:
            days = self.DEFAULT_PURGE_DAYS
        # bool is an int subclass but never a valid day count
        elif isinstance(days, bool) or not isinstance(days, (int, float)):
            raise ToolCallError("Argument 'days' must be a number")
        elif days < 0:
            raise ToolCallError("Argument 'days' cannot be negative")

        count = self.store.purge_older_than(days)
        return f"Cleared {count} old reminders."

    def _help(self, args: Dict[str, Any]) -> str:
        return HELP_DOCUMENTATION
