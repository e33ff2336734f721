# schedules/registry.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime

from .schedule import Schedule
from .schedule_models import Task, TaskIdCounter

logger = logging.getLogger(__name__)


class ScheduleRegistry:
    """
    All schedules known to the running program, in insertion order.

    Names are not required to be unique; every by-name operation acts on the
    first match only.
    """

    def __init__(self, id_counter: TaskIdCounter | None = None) -> None:
        self._schedules: list[Schedule] = []
        self.id_counter = id_counter or TaskIdCounter()

    def __iter__(self) -> Iterator[Schedule]:
        return iter(self._schedules)

    def __len__(self) -> int:
        return len(self._schedules)

    def __getitem__(self, index: int) -> Schedule:
        return self._schedules[index]

    def is_empty(self) -> bool:
        return not self._schedules

    def schedules(self) -> Iterator[Schedule]:
        return iter(self._schedules)

    def task_count(self) -> int:
        return sum(s.size for s in self._schedules)

    # ---- lookup ----

    def index_of(self, name: str) -> int | None:
        for i, schedule in enumerate(self._schedules):
            if schedule.name == name:
                return i
        return None

    def find_by_name(self, name: str) -> Schedule | None:
        idx = self.index_of(name)
        return None if idx is None else self._schedules[idx]

    # ---- mutation ----

    def add(self, schedule: Schedule) -> Schedule:
        self._schedules.append(schedule)
        return schedule

    def get_or_create(self, name: str) -> tuple[Schedule, bool]:
        """Return (schedule, created). created is True only for a brand new schedule."""
        existing = self.find_by_name(name)
        if existing is not None:
            return existing, False
        schedule = self.add(Schedule(name))
        logger.debug("Schedule created name=%r total=%d", name, len(self._schedules))
        return schedule, True

    def remove_by_name(self, name: str) -> Schedule | None:
        idx = self.index_of(name)
        if idx is None:
            logger.warning("Schedule %r does not exist.", name)
            return None
        removed = self._schedules.pop(idx)
        logger.info("Schedule %r removed (%d task(s)).", name, removed.size)
        return removed

    # ---- task construction ----

    def new_task(
        self,
        description: str,
        date_text: str,
        time_text: str,
        *,
        now: datetime | None = None,
    ) -> Task:
        """Create a task whose id comes from this registry's counter."""
        return Task.create(
            description,
            date_text,
            time_text,
            task_id=self.id_counter.allocate(),
            now=now,
        )
