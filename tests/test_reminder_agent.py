"""
Tests for the remindme Reminder Agent (tool dispatch)

Covers every tool's text reply, argument validation and the
"Error:" rendering of failures.
"""

import sys
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock

print("="*70)
print("Starting Reminder Agent Tests...")
print("="*70)

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from remindme.agents import HELP_DOCUMENTATION, ReminderAgent
from remindme.memory import InMemoryStorage, ReminderStatus, ReminderStore
from remindme.tools import NotesArchiveError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

print("\n✓ Imports successful\n")

START = datetime(2024, 1, 31, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self):
        self.now = START

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_agent(archive=None):
    counter = iter(range(1, 10_000))
    clock = FakeClock()
    store = ReminderStore(
        storage=InMemoryStorage(),
        archive=archive if archive is not None else Mock(),
        clock=clock,
        id_factory=lambda created: f"rem_{next(counter)}",
    )
    return ReminderAgent(store), store, clock


def test_remind_me():
    """Adding reminders through the tool"""
    print("\n" + "="*70)
    print("TEST 1: remind_me")
    print("="*70)

    agent, store, _ = make_agent()

    assert agent.handle("remind_me", {"reminder": "Test the loop", "priority": "high"}) == "Reminder added: rem_1"
    assert agent.handle("remind_me", {"reminder": "  padded  "}) == "Reminder added: rem_2"
    assert store.get("rem_1").priority.value == "high"
    assert store.get("rem_2").content == "padded"
    assert store.get("rem_2").priority.value == "normal"
    print("✓ Reminders added")

    assert agent.handle("remind_me", {}) == "Error: Missing required argument: reminder"
    assert agent.handle("remind_me", {"reminder": "   "}) == "Error: Reminder text cannot be empty"
    assert agent.handle("remind_me", {"reminder": 42}) == "Error: Argument 'reminder' must be a string"
    reply = agent.handle("remind_me", {"reminder": "x", "priority": "urgent"})
    assert reply.startswith("Error: Argument 'priority' must be one of: high, normal, low")
    assert store.get_stats()['total'] == 2
    print("✓ Invalid arguments rejected without side effects")

    print("\n✅ remind_me test PASSED")


def test_check_reminders():
    """Listing and formatting"""
    print("\n" + "="*70)
    print("TEST 2: check_reminders")
    print("="*70)

    agent, _, clock = make_agent()

    assert agent.handle("check_reminders") == "No active reminders."
    print("✓ Empty queue message")

    agent.handle("remind_me", {"reminder": "Normal one"})
    clock.advance(minutes=1)
    agent.handle("remind_me", {"reminder": "Urgent one", "priority": "high"})

    reply = agent.handle("check_reminders", {"filter": "all"})
    assert reply == (
        "Active reminders:\n"
        "\n"
        "[HIGH] rem_2: Urgent one\n"
        "  Created: 2024-01-31T09:01:00+00:00\n"
        "\n"
        "[NORMAL] rem_1: Normal one\n"
        "  Created: 2024-01-31T09:00:00+00:00"
    )
    print("✓ Sorted, formatted listing")

    assert "rem_1" not in agent.handle("check_reminders", {"filter": "high"})
    assert agent.handle("check_reminders", {"filter": "low"}) == "No active reminders."
    assert agent.handle("check_reminders", {"filter": "urgent"}).startswith("Error:")
    print("✓ Filters applied and validated")

    print("\n✅ check_reminders test PASSED")


def test_complete_and_delete():
    """complete_reminder / delete_reminder replies"""
    print("\n" + "="*70)
    print("TEST 3: complete_reminder and delete_reminder")
    print("="*70)

    agent, store, _ = make_agent()
    agent.handle("remind_me", {"reminder": "A"})
    agent.handle("remind_me", {"reminder": "B"})

    assert agent.handle("complete_reminder", {"id": "rem_1"}) == "Reminder rem_1 marked as completed."
    assert agent.handle("complete_reminder", {"id": "rem_1"}) == "Reminder rem_1 not found."
    assert store.get("rem_1").status == ReminderStatus.COMPLETED
    print("✓ Complete replies")

    assert agent.handle("delete_reminder", {"id": "rem_1"}) == "Reminder rem_1 deleted."
    assert agent.handle("delete_reminder", {"id": "rem_1"}) == "Reminder rem_1 not found."
    assert agent.handle("delete_reminder", {}) == "Error: Missing required argument: id"
    assert agent.handle("complete_reminder", {"id": None}) == "Error: Missing required argument: id"
    print("✓ Delete replies")

    print("\n✅ complete/delete test PASSED")


def test_move_to_notes():
    """move_to_notes relays the store message"""
    print("\n" + "="*70)
    print("TEST 4: move_to_notes")
    print("="*70)

    archive = Mock()
    agent, store, _ = make_agent(archive=archive)
    agent.handle("remind_me", {"reminder": "Archive me"})

    reply = agent.handle("move_to_notes", {"id": "rem_1", "note": "  with context  "})
    assert reply == "Moved to notes: reminder_2024-01-31_rem_1.md"
    _, document = archive.write_note.call_args[0]
    assert "Note: with context\n" in document
    assert store.get("rem_1").status == ReminderStatus.MOVED
    print("✓ Moved with note")

    assert agent.handle("move_to_notes", {"id": "rem_1"}) == "Reminder not found or already processed"
    assert agent.handle("move_to_notes", {"id": "rem_1", "note": 5}) == "Error: Argument 'note' must be a string"
    print("✓ Second move refused")

    archive.write_note.side_effect = NotesArchiveError("permission denied")
    agent.handle("remind_me", {"reminder": "Stuck"})
    assert agent.handle("move_to_notes", {"id": "rem_2"}) == "Error moving to notes: permission denied"
    assert store.get("rem_2").status == ReminderStatus.ACTIVE
    print("✓ Sink failure reported, reminder stays active")

    print("\n✅ move_to_notes test PASSED")


def test_clear_old_reminders():
    """Day count validation and purge reply"""
    print("\n" + "="*70)
    print("TEST 5: clear_old_reminders")
    print("="*70)

    agent, _, clock = make_agent()
    agent.handle("remind_me", {"reminder": "old"})
    agent.handle("complete_reminder", {"id": "rem_1"})

    assert agent.handle("clear_old_reminders") == "Cleared 0 old reminders."
    clock.advance(days=8)
    assert agent.handle("clear_old_reminders", {"days": 7}) == "Cleared 1 old reminders."
    assert agent.handle("clear_old_reminders", {"days": 0.5}) == "Cleared 0 old reminders."
    print("✓ Purge replies")

    assert agent.handle("clear_old_reminders", {"days": "7"}) == "Error: Argument 'days' must be a number"
    assert agent.handle("clear_old_reminders", {"days": True}) == "Error: Argument 'days' must be a number"
    assert agent.handle("clear_old_reminders", {"days": -1}) == "Error: Argument 'days' cannot be negative"
    print("✓ Bad day counts rejected")

    print("\n✅ clear_old_reminders test PASSED")


def test_help_and_unknown_tools():
    """help text, tool listing and dispatch errors"""
    print("\n" + "="*70)
    print("TEST 6: help and dispatch errors")
    print("="*70)

    agent, _, _ = make_agent()

    assert agent.handle("help") == HELP_DOCUMENTATION
    assert "remind_me(reminder, priority?)" in HELP_DOCUMENTATION
    names = [tool['name'] for tool in agent.list_tools()]
    assert names == [
        "remind_me", "check_reminders", "complete_reminder", "delete_reminder",
        "move_to_notes", "clear_old_reminders", "help",
    ]
    tools = agent.list_tools()
    tools.clear()
    agent.list_tools()[0]["inputSchema"]["required"].append("extra")
    assert len(agent.list_tools()) == 7
    assert agent.list_tools()[0]["inputSchema"]["required"] == ["reminder"]
    assert len(make_agent()[0].list_tools()) == 7
    print("✓ Help and tool list")

    assert agent.handle("nope", {}) == "Error: Unknown tool: nope"
    assert agent.handle("remind_me", ["not", "a", "dict"]) == "Error: Arguments must be an object"
    print("✓ Unknown tool and bad arguments")

    store = Mock()
    store.add.side_effect = RuntimeError("boom")
    broken = ReminderAgent(store)
    assert broken.handle("remind_me", {"reminder": "x"}) == "Error: boom"
    print("✓ Unexpected store failure rendered as text")

    print("\n✅ help/dispatch test PASSED")


if __name__ == "__main__":
    test_remind_me()
    test_check_reminders()
    test_complete_and_delete()
    test_move_to_notes()
    test_clear_old_reminders()
    test_help_and_unknown_tools()
    print("\n✅ ALL REMINDER AGENT TESTS PASSED")
