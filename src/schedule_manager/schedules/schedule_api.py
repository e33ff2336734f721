# src/schedule_manager/schedules/schedule_api.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from pathlib import Path

from ..core.state import AppState
from .schedule import Schedule
from .schedule_models import InsertResult, Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddTaskOutcome:
    schedule: Schedule
    created: bool  # schedule did not exist before this call
    result: InsertResult
    saved: bool  # record appended to the backing file


class RemoveStatus(StrEnum):
    REMOVED = "removed"
    NO_SCHEDULES = "no_schedules"
    SCHEDULE_NOT_FOUND = "schedule_not_found"
    TASK_NOT_FOUND = "task_not_found"


@dataclass(frozen=True, slots=True)
class RemoveOutcome:
    status: RemoveStatus
    task: Task | None = None


def add_task(
    state: AppState,
    *,
    schedule_name: str,
    date_text: str,
    time_text: str,
    description: str,
    now: datetime | None = None,
) -> AddTaskOutcome:
    """
    Interactive insert: create-on-demand, conflict check, then append to file.

    A conflict leaves both the schedule and the file untouched. A failed append
    keeps the in-memory insert and reports saved=False.
    """
    schedule, created = state.registry.get_or_create(schedule_name)
    if created:
        logger.info("New schedule created: %s", schedule_name)

    task = state.registry.new_task(description, date_text, time_text, now=now)
    result = schedule.insert_sorted(task)
    if not result.inserted:
        logger.info(
            "Schedule conflict in %r: %s already at %s",
            schedule_name,
            result.existing,
            task.timestamp.isoformat(),
        )
        return AddTaskOutcome(schedule=schedule, created=created, result=result, saved=False)

    saved = True
    try:
        state.store.append(schedule_name, task)
    except OSError:
        logger.exception("Failed to append task id=%s to %s", task.id, state.store.path)
        saved = False

    return AddTaskOutcome(schedule=schedule, created=created, result=result, saved=saved)


def remove_task(state: AppState, *, schedule_name: str, task_id: int) -> RemoveOutcome:
    if state.registry.is_empty():
        return RemoveOutcome(RemoveStatus.NO_SCHEDULES)

    schedule = state.registry.find_by_name(schedule_name)
    if schedule is None:
        logger.warning("Schedule not found: %s", schedule_name)
        return RemoveOutcome(RemoveStatus.SCHEDULE_NOT_FOUND)

    if not schedule.exists_by_id(task_id):
        logger.warning("ID %s not found in schedule: %s", task_id, schedule_name)
        return RemoveOutcome(RemoveStatus.TASK_NOT_FOUND)

    removed = schedule.remove_by_id(task_id)
    return RemoveOutcome(RemoveStatus.REMOVED, removed)


def remove_schedule(state: AppState, name: str) -> Schedule | None:
    return state.registry.remove_by_name(name)


def reverse_schedule(state: AppState, index: int) -> bool:
    """Reverse the schedule at registry position `index`. False if out of range or empty."""
    if index < 0 or index >= len(state.registry):
        return False
    return state.registry[index].reverse()


def export_schedules(state: AppState, path: Path | None = None) -> Path | None:
    """
    Export every schedule to CSV. None when there is nothing to export.

    Storage errors propagate (OSError) so the caller can report them.
    """
    if state.registry.is_empty():
        logger.warning("No schedules available to export.")
        return None
    return state.store.export_csv(state.registry, path)
