# src/schedule_manager/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..schedules.registry import ScheduleRegistry
from .ports import ScheduleRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: ScheduleRepo
    registry: ScheduleRegistry = field(default_factory=ScheduleRegistry)
