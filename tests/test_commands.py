# tests/test_commands.py

from __future__ import annotations

from schedule_manager.cli.commands import CommandRegistry, registry, render_schedule_table
from schedule_manager.schedules.registry import ScheduleRegistry

from .fakes import Emitted, ScriptedInput


def _run(state, choice: str, answers: list[str]) -> tuple[str, Emitted, ScriptedInput]:
    ask = ScriptedInput(answers)
    emitted = Emitted()
    reply = registry.handle(state, choice, ask, emit=emitted)
    return reply, emitted, ask


def _insert(state, name: str, date_text: str, time_text: str, description: str) -> str:
    reply, _, _ = _run(state, "3", [name, date_text, time_text, description])
    return reply


def test_command_registry_routes_numbered_choices(state) -> None:
    reg = CommandRegistry()
    called = {"one": 0}

    def one(state, ask, emit):
        called["one"] += 1
        emit("note")
        return "one:" + ask("q? ")

    reg.register("1", one, "First")
    emitted = Emitted()

    assert reg.handle(state, " 1 ", ScriptedInput(["x"]), emit=emitted) == "one:x"
    assert called["one"] == 1
    assert emitted.lines == ["note"]
    assert reg.keys() == ["1"]
    assert " 1. First" in reg.build_menu()
    assert " 7. Exit" in reg.build_menu()


def test_command_registry_rejects_bad_input(state) -> None:
    reg = CommandRegistry()
    assert "valid number" in reg.handle(state, "abc", ScriptedInput([]))
    assert "valid number" in reg.handle(state, "", ScriptedInput([]))
    assert reg.handle(state, "9", ScriptedInput([])) == "Invalid choice. Try again."


def test_menu_lists_all_choices() -> None:
    menu = registry.build_menu()
    for label in (
        "1. Display All Schedules",
        "2. Reverse a Schedule",
        "3. Insert New Task",
        "4. Remove Task by ID",
        "5. Remove Schedule",
        "6. Export Schedule to CSV",
        "7. Exit",
    ):
        assert label in menu


def test_display_empty_and_table(state) -> None:
    reply, _, _ = _run(state, "1", [])
    assert reply == "No schedules available to display."

    _insert(state, "work", "10/20/2025", "02:30 PM", "Review PR")
    _insert(state, "work", "10/20/2025", "09:00 AM", "Standup")
    reply, _, _ = _run(state, "1", [])

    assert "Schedule: work" in reply
    assert "Total: 2 task(s)" in reply
    assert reply.index("Standup") < reply.index("Review PR")


def test_render_schedule_table_columns(state) -> None:
    _insert(state, "work", "10/20/2025", "09:00 AM", "Standup")
    table = render_schedule_table(state.registry[0])

    row = [line for line in table.splitlines() if "Standup" in line][0]
    cells = [c.strip() for c in row.split("|")]
    assert cells == ["1", "1", "10/20/2025", "09:00 AM", "Standup"]


def test_insert_creates_schedule_and_writes_file(state) -> None:
    reply, emitted, ask = _run(state, "3", ["work", "10/20/2025", "02:30 pm", "Review PR"])

    assert "successfully added" in reply
    assert "New schedule will be created: work" in emitted.text
    assert ask.remaining == 0
    assert state.settings.schedule_file.read_text(encoding="utf-8") == (
        "work;10/20/2025;02:30 PM;Review PR\n"
    )


def test_insert_conflict_reports_existing_task(state) -> None:
    _insert(state, "work", "10/20/2025", "02:30 PM", "Review PR")

    reply = _insert(state, "work", "10/20/2025", "02:30 PM", "Other")

    assert "Conflict" in reply
    assert "10/20/2025 : 02:30 PM : Review PR" in reply
    assert state.registry[0].size == 1
    lines = state.settings.schedule_file.read_text(encoding="utf-8").splitlines()
    assert lines == ["work;10/20/2025;02:30 PM;Review PR"]


def test_insert_requires_schedule_name(state) -> None:
    reply, _, ask = _run(state, "3", ["  "])
    assert reply == "Schedule name required."
    assert ask.remaining == 0
    assert state.registry.is_empty()


def test_insert_rejects_separator_in_schedule_name(state) -> None:
    reply, _, ask = _run(state, "3", ["a;b"])

    assert reply == "Schedule name cannot contain ';'."
    assert ask.remaining == 0
    assert state.registry.is_empty()
    assert not state.settings.schedule_file.exists()


def test_insert_requires_description(state) -> None:
    reply, _, ask = _run(state, "3", ["work", "10/20/2025", "02:30 PM", "   "])

    assert reply == "Task description required."
    assert ask.remaining == 0
    assert state.registry.is_empty()
    assert not state.settings.schedule_file.exists()


def test_inserted_tasks_survive_reload(state) -> None:
    _insert(state, "work", "10/20/2025", "02:30 PM", "Review PR")
    _insert(state, "home", "10/21/2025", "08:00 AM", "Plan; then shop")

    reg = ScheduleRegistry()
    summary = state.store.load_into(reg)

    assert (summary.tasks, summary.skipped) == (2, 0)
    assert str(reg.find_by_name("work").head) == "10/20/2025 : 02:30 PM : Review PR"
    assert str(reg.find_by_name("home").head) == "10/21/2025 : 08:00 AM : Plan; then shop"


def test_reverse_single_schedule(state) -> None:
    reply, _, _ = _run(state, "2", [])
    assert reply == "No schedules available to reverse."

    _insert(state, "work", "10/20/2025", "09:00 AM", "a")
    _insert(state, "work", "10/20/2025", "10:00 AM", "b")

    reply, _, ask = _run(state, "2", [])
    assert "has been reversed" in reply
    assert ask.prompts == []
    assert [t.description for t in state.registry[0]] == ["b", "a"]


def test_reverse_with_several_schedules_prompts_until_exit(state) -> None:
    _insert(state, "work", "10/20/2025", "09:00 AM", "a")
    _insert(state, "work", "10/20/2025", "10:00 AM", "b")
    _insert(state, "home", "10/20/2025", "07:00 AM", "c")

    # "x" is re-prompted, "9" is out of range, "0" reverses work, "2" exits
    reply, emitted, ask = _run(state, "2", ["x", "9", "0", "2"])

    assert reply == "Done reversing."
    assert ask.remaining == 0
    assert "Please enter a valid number (0 - 2)." in emitted.lines
    assert "Invalid choice, please try again." in emitted.lines
    assert "Schedule 'work' has been reversed." in emitted.lines
    assert "0: work\n1: home\n2: Exit" in emitted.text
    assert [t.description for t in state.registry[0]] == ["b", "a"]
    assert [t.description for t in state.registry[1]] == ["c"]


def test_remove_task_flow(state) -> None:
    reply, _, _ = _run(state, "4", [])
    assert reply == "No schedules available to modify."

    _insert(state, "work", "10/20/2025", "09:00 AM", "a")
    task_id = state.registry[0].head.id

    assert _run(state, "4", ["home"])[0] == "Schedule not found: home"
    assert _run(state, "4", ["work", "abc"])[0] == "Invalid id."
    assert _run(state, "4", ["work", str(task_id + 5)])[0] == (
        f"ID {task_id + 5} not found in schedule: work"
    )
    assert _run(state, "4", ["work", str(task_id)])[0] == (
        f"Task ID {task_id} successfully removed."
    )
    assert state.registry[0].is_empty()


def test_remove_schedule_flow(state) -> None:
    assert _run(state, "5", [])[0] == "No schedules available to remove."

    _insert(state, "work", "10/20/2025", "09:00 AM", "a")
    assert _run(state, "5", ["home"])[0] == "Schedule home does not exist."
    assert _run(state, "5", ["work"])[0] == "Schedule work successfully removed."
    assert state.registry.is_empty()


def test_export_flow(state) -> None:
    assert _run(state, "6", [])[0] == "No schedules available to export."

    _insert(state, "work", "10/20/2025", "09:00 AM", "a, b")
    reply, _, _ = _run(state, "6", [])

    csv_path = state.settings.schedule_file.with_suffix(".csv")
    assert reply == f"Successfully exported to: {csv_path.resolve()}"
    assert csv_path.read_text(encoding="utf-8").splitlines() == [
        "ScheduleName,Date,Time,Task",
        "work,2025-10-20,09:00,a  b",
    ]


def test_export_failure_is_reported(state) -> None:
    _insert(state, "work", "10/20/2025", "09:00 AM", "a")
    state.settings.schedule_file.with_suffix(".csv.tmp").mkdir()

    reply, _, _ = _run(state, "6", [])

    assert reply.startswith("Error exporting to CSV")
