# src/schedule_manager/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the schedule helpers.

The helpers depend on Protocols instead of the concrete flat-file store.
This keeps storage swappable and makes testing easier.
"""

from pathlib import Path
from typing import Protocol

from ..schedules.registry import ScheduleRegistry
from ..schedules.schedule_models import Task


class ScheduleRepo(Protocol):
    """
    Storage-side port: how schedules reach disk.

    Implementations raise OSError (ScheduleFileError for the file store) on
    I/O failure; callers report it and leave the in-memory registry as is.
    """

    @property
    def path(self) -> Path: ...

    def load_into(self, registry: ScheduleRegistry, *, reject_conflicts: bool = False) -> object: ...
    def append(self, schedule_name: str, task: Task) -> None: ...
    def export_csv(self, registry: ScheduleRegistry, path: Path | None = None) -> Path: ...
