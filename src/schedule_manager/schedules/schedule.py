# schedules/schedule.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime

from .schedule_models import InsertResult, InsertStatus, Task

logger = logging.getLogger(__name__)


class Schedule:
    """
    A named, chronologically ordered collection of tasks.

    Storage is a plain list kept in traversal order, so head/tail/size are
    always derived from it and can never disagree with what iteration yields.

    Ordering:
    - a fresh schedule is ascending by timestamp;
    - reverse() flips the list and the direction flag;
    - insert_sorted() always inserts according to the current direction, so the
      list stays sorted (ascending or descending) after every public call.

    Equal timestamps keep FIFO order in ascending mode (a new task lands after
    existing ties). Descending mode mirrors that, so reversing back gives the
    same chain ascending insertion would have built.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._tasks: list[Task] = []
        self._descending = False

    def __repr__(self) -> str:
        order = "desc" if self._descending else "asc"
        return f"Schedule(name={self.name!r}, size={self.size}, order={order})"

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- read accessors ----

    @property
    def size(self) -> int:
        return len(self._tasks)

    @property
    def head(self) -> Task | None:
        return self._tasks[0] if self._tasks else None

    @property
    def tail(self) -> Task | None:
        return self._tasks[-1] if self._tasks else None

    @property
    def descending(self) -> bool:
        return self._descending

    def is_empty(self) -> bool:
        return not self._tasks

    def tasks(self) -> Iterator[Task]:
        """Traverse head -> tail. Each call starts a fresh pass."""
        return iter(self._tasks)

    def next_of(self, task: Task) -> Task | None:
        idx = self._index_of_id(task.id)
        if idx is None or idx + 1 >= len(self._tasks):
            return None
        return self._tasks[idx + 1]

    # ---- lookup ----

    def find_by_timestamp(self, ts: datetime) -> Task | None:
        for task in self._tasks:
            if task.timestamp == ts:
                return task
        return None

    def find_by_id(self, task_id: int) -> Task | None:
        idx = self._index_of_id(task_id)
        return None if idx is None else self._tasks[idx]

    def exists_by_id(self, task_id: int) -> bool:
        return self._index_of_id(task_id) is not None

    def _index_of_id(self, task_id: int) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    # ---- mutation ----

    def insert_sorted(self, task: Task | None, *, allow_conflicts: bool = False) -> InsertResult:
        """
        Insert keeping the current sort direction.

        Unless allow_conflicts is set, a task already holding the same
        timestamp wins: nothing is inserted and the existing task is returned
        in the result.
        """
        if task is None:
            logger.warning("Cannot insert an absent task into schedule %r.", self.name)
            return InsertResult(InsertStatus.REJECTED)

        ts = task.timestamp
        if not allow_conflicts:
            existing = self.find_by_timestamp(ts)
            if existing is not None:
                logger.debug(
                    "Conflict in schedule %r at %s: existing id=%s",
                    self.name,
                    ts.isoformat(),
                    existing.id,
                )
                return InsertResult(InsertStatus.CONFLICT, task=task, existing=existing)

        idx = self._insertion_index(ts)
        self._tasks.insert(idx, task)
        logger.debug(
            "Task inserted id=%s schedule=%r at=%s pos=%d size=%d",
            task.id,
            self.name,
            ts.isoformat(),
            idx,
            self.size,
        )
        return InsertResult(InsertStatus.INSERTED, task=task)

    def _insertion_index(self, ts: datetime) -> int:
        # Ascending: skip every task not after ts (ties stay in front).
        # Descending: skip every task strictly after ts (new task goes before ties).
        idx = 0
        if self._descending:
            while idx < len(self._tasks) and self._tasks[idx].timestamp > ts:
                idx += 1
        else:
            while idx < len(self._tasks) and self._tasks[idx].timestamp <= ts:
                idx += 1
        return idx

    def remove_by_id(self, task_id: int) -> Task | None:
        """Unlink the task with this id. Returns it, or None when absent."""
        if not self._tasks:
            logger.warning("Schedule %r is empty; nothing to remove.", self.name)
            return None

        idx = self._index_of_id(task_id)
        if idx is None:
            logger.warning("Task id %s does not exist in schedule %r.", task_id, self.name)
            return None

        removed = self._tasks.pop(idx)
        logger.info(
            "Task %r (id=%s) removed from schedule %r.", removed.description, removed.id, self.name
        )
        return removed

    def reverse(self) -> bool:
        """Flip traversal order in place. Returns False (with a warning) when empty."""
        if not self._tasks:
            logger.warning("Schedule %r is empty; nothing to reverse.", self.name)
            return False
        self._tasks.reverse()
        self._descending = not self._descending
        order = "descending" if self._descending else "ascending"
        logger.info("Schedule %r reversed (now %s).", self.name, order)
        return True

    # ---- rendering ----

    def render(self) -> str:
        return "".join(f"{task}\n" for task in self._tasks)
