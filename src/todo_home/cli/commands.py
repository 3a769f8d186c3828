# src/todo_home/cli/commands.py

"""
Slash commands shared by the console and Matrix connectors.

A command never touches the store: it builds a transport event and runs it
through parse_action(), exactly like any other transport would. Handlers
return either a typed Action (to be handled by TaskHome) or a reply string.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..home.actions import Action, ActionKind, parse_action

logger = logging.getLogger(__name__)

CommandResult = Action | str
CommandHandler = Callable[[list[str], str], CommandResult]

DUE_PREFIX = "due:"
CLEAR_DUE = "none"
SELF_ASSIGNEE = "@me"


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, line: str, user_id: str) -> CommandResult | None:
        """
        Handle a string like "/command args".
        Returns an Action, a reply string, or None if not a command.
        UnknownAction from parse_action propagates.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(args, user_id)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _event(kind: ActionKind, user_id: str, **payload: Any) -> Action:
    return parse_action({"kind": kind.value, "actor_id": user_id, "payload": payload})


def split_task_fields(args: list[str]) -> tuple[str, dict[str, str | None]]:
    """
    Split "<text words> [due:YYYY-MM-DD] [@assignee]" into (text, options).
    Options may appear anywhere; the rest is the task text.

    Only options actually given end up in the dict, so an edit can tell
    "left out" from "cleared": due:none clears the due date and @me assigns
    the task back to the sender (both map to None).
    """
    words: list[str] = []
    options: dict[str, str | None] = {}
    for token in args:
        if token.lower().startswith(DUE_PREFIX):
            raw = token[len(DUE_PREFIX):]
            options["due_date"] = None if raw.lower() in ("", CLEAR_DUE) else raw
        elif token.startswith("@") and len(token) > 1:
            options["assignee"] = None if token.lower() == SELF_ASSIGNEE else token
        else:
            words.append(token)
    return " ".join(words), options


def cmd_help(args: list[str], user_id: str) -> CommandResult:
    return registry.build_help()


def cmd_home(args: list[str], user_id: str) -> CommandResult:
    return _event(ActionKind.SURFACE_OPENED, user_id)


def cmd_new(args: list[str], user_id: str) -> CommandResult:
    return _event(ActionKind.OPEN_CREATE_FORM, user_id)


def cmd_add(args: list[str], user_id: str) -> CommandResult:
    """/add <text> [due:YYYY-MM-DD] [@assignee]"""
    text, options = split_task_fields(args)
    return _event(ActionKind.SUBMIT_CREATE, user_id, text=text, **options)


def cmd_edit(args: list[str], user_id: str) -> CommandResult:
    if not args:
        return "Usage: /edit <id>"
    return _event(ActionKind.OPEN_EDIT_FORM, user_id, task_id=args[0])


def cmd_update(args: list[str], user_id: str) -> CommandResult:
    """/update <id> <text> [due:YYYY-MM-DD|none] [@assignee|@me]; left-out options keep their values."""
    if not args:
        return "Usage: /update <id> <text> [due:YYYY-MM-DD|none] [@assignee|@me]"
    text, options = split_task_fields(args[1:])
    return _event(ActionKind.SUBMIT_EDIT, user_id, task_id=args[0], text=text, **options)


def cmd_done(args: list[str], user_id: str) -> CommandResult:
    if not args:
        return "Usage: /done <id>"
    return _event(ActionKind.COMPLETE, user_id, task_id=args[0])


def cmd_delete(args: list[str], user_id: str) -> CommandResult:
    if not args:
        return "Usage: /delete <id>"
    return _event(ActionKind.DELETE, user_id, task_id=args[0])


def cmd_filter(args: list[str], user_id: str) -> CommandResult:
    if not args:
        return "Usage: /filter overdue | upcoming | inbox"
    return _event(ActionKind.CHANGE_FILTER, user_id, mode=args[0].lower())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("home", cmd_home, help_text="Show your to-do list.", aliases=["list", "ls"])
registry.register("new", cmd_new, help_text="Open the new-todo form.", aliases=["todo"])
registry.register("add", cmd_add, help_text="Create: /add <text> [due:YYYY-MM-DD] [@assignee].")
registry.register("edit", cmd_edit, help_text="Open the edit form: /edit <id>.")
registry.register(
    "update",
    cmd_update,
    help_text="Save an edit: /update <id> <text> [due:YYYY-MM-DD|none] [@assignee|@me].",
)
registry.register("done", cmd_done, help_text="Complete a todo: /done <id>.", aliases=["complete"])
registry.register("delete", cmd_delete, help_text="Delete a todo: /delete <id>.", aliases=["rm"])
registry.register("filter", cmd_filter, help_text="Switch view: /filter overdue | upcoming | inbox.")
