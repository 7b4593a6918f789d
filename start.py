"""
remindme Start - Console Entry Point

Reads one tool call per line and prints the reply:

    remind_me {"reminder": "Check the backup job", "priority": "high"}
    check_reminders
    complete_reminder {"id": "rem_1700000000000_ab12c"}

Logs go to stderr so stdout only carries tool replies.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from remindme.agents import ReminderAgent
from remindme.memory import JsonFileStorage, ReminderStore
from remindme.tools import NotesArchive

logger = logging.getLogger(__name__)


class CommandParseError(ValueError):
    """Raised when a console line is not '<tool> [json-object]'"""
    pass


def parse_command(line: str) -> Tuple[str, Dict[str, Any]]:
    """
    Split a console line into tool name and arguments.

    Raises:
        CommandParseError: If the arguments are not a JSON object
    """
    name, _, raw_args = line.strip().partition(' ')
    raw_args = raw_args.strip()
    if not raw_args:
        return name, {}

    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as e:
        raise CommandParseError(f"Invalid JSON arguments: {e}") from e
    if not isinstance(arguments, dict):
        raise CommandParseError("Arguments must be a JSON object")
    return name, arguments


def build_agent(storage_path: Optional[Path] = None, notes_dir: Optional[Path] = None) -> ReminderAgent:
    storage = JsonFileStorage(storage_path or ReminderStore.DEFAULT_STORAGE_FILE)
    store = ReminderStore(storage=storage, archive=NotesArchive(notes_dir))
    return ReminderAgent(store)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Reminder queue console")
    parser.add_argument('--storage', type=Path, help="Reminder JSON file (default: ~/.claude_reminders.json)")
    parser.add_argument('--notes-dir', type=Path, help="Directory for archived notes")
    parser.add_argument('--verbose', action='store_true', help="Enable debug logging")
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    agent = build_agent(args.storage, args.notes_dir)
    prompt = "reminders> " if sys.stdin.isatty() else ""
    logger.info("remindme console running on stdin")

    while True:
        try:
            line = input(prompt).strip()

            if not line:
                continue

            if line.lower() in ["quit", "exit", "q"]:
                break

            if line == "tools":
                print("\n".join(tool['name'] for tool in agent.list_tools()))
                continue

            name, arguments = parse_command(line)
            print(agent.handle(name, arguments))

        except CommandParseError as e:
            print(f"Error: {e}")
        except EOFError:
            break
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break

    return 0


if __name__ == "__main__":
    sys.exit(main())
