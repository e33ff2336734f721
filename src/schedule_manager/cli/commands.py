# src/schedule_manager/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..schedules import schedule_api
from ..schedules.schedule import Schedule
from ..schedules.schedule_api import RemoveStatus
from ..schedules.schedule_models import DATE_HINT, TIME_HINT, format_date, format_time
from ..storage.schedule_file import RECORD_SEPARATOR

Prompt = Callable[[str], str]
CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, Prompt, CommandEmitter], str]

EXIT_CHOICE = "7"
RULE_WIDTH = 60

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Numbered menu registry used by the console connector (1-7)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(self, key: str, handler: CommandHandler, help_text: str) -> None:
        self._handlers[key] = handler
        self._help[key] = help_text

    def keys(self) -> list[str]:
        return list(self._handlers)

    def handle(
        self,
        state: AppState,
        line: str,
        ask: Prompt,
        emit: CommandEmitter | None = None,
    ) -> str:
        """
        Run the handler for a menu choice like "3".
        Non-numeric input and unknown numbers return a message; nothing raises.
        """
        choice = line.strip()
        if not choice.isdigit():
            return f"Please enter a valid number (1-{EXIT_CHOICE})."

        handler = self._handlers.get(str(int(choice)))
        if not handler:
            return "Invalid choice. Try again."

        return handler(state, ask, emit or _drop)

    def build_menu(self, title: str = "Main Menu - Schedule Manager") -> str:
        lines = ["=" * 33, f" {title}", "=" * 33]
        for key, help_text in self._help.items():
            lines.append(f" {key}. {help_text}")
        lines.append(f" {EXIT_CHOICE}. Exit")
        return "\n".join(lines)


def _drop(_: str) -> None:
    return None


registry = CommandRegistry()


# ---- rendering ----


def render_schedule_table(schedule: Schedule) -> str:
    lines = [
        "=" * RULE_WIDTH,
        f"Schedule: {schedule.name}",
        "=" * RULE_WIDTH,
        f" {'#':<3} | {'ID':<5} | {'Date':<14} | {'Time':<8} | Task",
        "=" * RULE_WIDTH,
    ]
    for n, task in enumerate(schedule, start=1):
        lines.append(
            f" {n:<3d} | {task.id:<5d} | {format_date(task.date):<14} | "
            f"{format_time(task.time):<8} | {task.description}"
        )
    lines.append("-" * RULE_WIDTH)
    lines.append(f"Total: {schedule.size} task(s)")
    return "\n".join(lines)


# ---- handlers ----


def cmd_display(state: AppState, ask: Prompt, emit: CommandEmitter) -> str:
    if state.registry.is_empty():
        return "No schedules available to display."
    return "\n\n".join(render_schedule_table(s) for s in state.registry)


def _ask_index(ask: Prompt, emit: CommandEmitter, upper: int) -> int:
    """Prompt until an integer is entered. The caller checks the range."""
    while True:
        raw = ask("Enter your choice: ").strip()
        try:
            return int(raw)
        except ValueError:
            emit(f"Please enter a valid number (0 - {upper}).")


def cmd_reverse(state: AppState, ask: Prompt, emit: CommandEmitter) -> str:
    """
    One schedule: reverse it directly.
    Several: list them and keep asking until the extra "Exit" index is chosen.
    """
    reg = state.registry
    if reg.is_empty():
        return "No schedules available to reverse."

    if len(reg) == 1:
        schedule = reg[0]
        if not schedule.reverse():
            return f"Schedule '{schedule.name}' is empty. Nothing to reverse."
        return f"Schedule '{schedule.name}' has been reversed."

    exit_index = len(reg)
    while True:
        listing = ["Which schedule would you like to reverse?"]
        listing += [f"{i}: {s.name}" for i, s in enumerate(reg)]
        listing.append(f"{exit_index}: Exit")
        emit("\n".join(listing))

        choice = _ask_index(ask, emit, exit_index)
        if choice == exit_index:
            return "Done reversing."
        if not 0 <= choice < exit_index:
            emit("Invalid choice, please try again.")
            continue

        name = reg[choice].name
        if schedule_api.reverse_schedule(state, choice):
            emit(f"Schedule '{name}' has been reversed.")
        else:
            emit(f"Schedule '{name}' is empty. Nothing to reverse.")


def cmd_insert(state: AppState, ask: Prompt, emit: CommandEmitter) -> str:
    name = ask("Which schedule would you like to insert into? ").strip()
    if not name:
        return "Schedule name required."
    if RECORD_SEPARATOR in name:
        return f"Schedule name cannot contain '{RECORD_SEPARATOR}'."

    if state.registry.find_by_name(name) is None:
        emit(f"New schedule will be created: {name}")
    emit(f"Adding task to: {name}")

    date_text = ask(f"Enter date {DATE_HINT}: ")
    time_text = ask(f"Enter time {TIME_HINT}: ")
    description = ask("Enter task description: ").strip()
    if not description:
        return "Task description required."

    outcome = schedule_api.add_task(
        state,
        schedule_name=name,
        date_text=date_text,
        time_text=time_text,
        description=description,
    )
    if not outcome.result.inserted:
        return (
            "Schedule Conflict Detected!\n"
            "A task already exists at the same date and time:\n"
            f"  -> {outcome.result.existing}"
        )
    task = outcome.result.task
    if not outcome.saved:
        return f"Task added (ID {task.id}), but writing it to the file failed."
    return f"Task successfully added (ID {task.id}) and written to file."


def cmd_remove_task(state: AppState, ask: Prompt, emit: CommandEmitter) -> str:
    if state.registry.is_empty():
        return "No schedules available to modify."

    name = ask("Which schedule would you like to delete an item from? ").strip()
    if state.registry.find_by_name(name) is None:
        return f"Schedule not found: {name}"

    raw_id = ask("Which task ID would you like to delete? ").strip().rstrip(".")
    if not raw_id.isdigit():
        return "Invalid id."
    task_id = int(raw_id)

    outcome = schedule_api.remove_task(state, schedule_name=name, task_id=task_id)
    if outcome.status is RemoveStatus.REMOVED:
        return f"Task ID {task_id} successfully removed."
    if outcome.status is RemoveStatus.TASK_NOT_FOUND:
        return f"ID {task_id} not found in schedule: {name}"
    if outcome.status is RemoveStatus.SCHEDULE_NOT_FOUND:
        return f"Schedule not found: {name}"
    return "No schedules available to modify."


def cmd_remove_schedule(state: AppState, ask: Prompt, emit: CommandEmitter) -> str:
    if state.registry.is_empty():
        return "No schedules available to remove."
    name = ask("Which schedule would you like to remove? ").strip()
    if schedule_api.remove_schedule(state, name) is None:
        return f"Schedule {name} does not exist."
    return f"Schedule {name} successfully removed."


def cmd_export(state: AppState, ask: Prompt, emit: CommandEmitter) -> str:
    try:
        path = schedule_api.export_schedules(state)
    except OSError as e:
        logger.error("CSV export failed: %s", e)
        return f"Error exporting to CSV: {e}"
    if path is None:
        return "No schedules available to export."
    return f"Successfully exported to: {path.resolve()}"


registry.register("1", cmd_display, help_text="Display All Schedules")
registry.register("2", cmd_reverse, help_text="Reverse a Schedule")
registry.register("3", cmd_insert, help_text="Insert New Task")
registry.register("4", cmd_remove_task, help_text="Remove Task by ID")
registry.register("5", cmd_remove_schedule, help_text="Remove Schedule")
registry.register("6", cmd_export, help_text="Export Schedule to CSV")
