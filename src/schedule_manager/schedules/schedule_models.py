# schedules/schedule_models.py

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import StrEnum

logger = logging.getLogger(__name__)

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%I:%M %p"

# strptime alone would also take "1/5/2025" and "2:30 PM".
_DATE_RE = re.compile(r"\d{2}/\d{2}/\d{4}")
_TIME_RE = re.compile(r"\d{2}:\d{2} [AP]M")

DATE_HINT = "MM/dd/yyyy (Ex: 10/20/2025)"
TIME_HINT = "hh:mm AM/PM (Ex: 02:30 PM)"


def parse_date(text: str) -> date | None:
    try:
        text = text.strip()
        if not _DATE_RE.fullmatch(text):
            return None
        return datetime.strptime(text, DATE_FORMAT).date()
    except (AttributeError, ValueError):
        return None


def parse_time(text: str) -> time | None:
    # Meridiem marker is accepted in any case ("pm", "Pm", "PM").
    try:
        text = text.strip().upper()
        if not _TIME_RE.fullmatch(text):
            return None
        return datetime.strptime(text, TIME_FORMAT).time()
    except (AttributeError, ValueError):
        return None


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_time(value: time) -> str:
    return value.strftime(TIME_FORMAT)


class TaskIdCounter:
    """
    Monotonic task id source.

    Owned by the ScheduleRegistry and handed to Task construction explicitly.
    Ids start at 1 and are never reused, even after the task is removed.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = int(start)

    def allocate(self) -> int:
        tid = self._next
        self._next += 1
        return tid

    def peek(self) -> int:
        return self._next


@dataclass(slots=True, eq=False)
class Task:
    """
    A single dated/timed item of work within a schedule.

    Identity is the id: two Task objects are equal only if they are the same object.
    """

    id: int
    description: str
    date: date
    time: time

    @classmethod
    def create(
        cls,
        description: str,
        date_text: str,
        time_text: str,
        *,
        task_id: int,
        now: datetime | None = None,
    ) -> Task:
        """
        Build a task from user/file text.

        Fields that fail to parse keep the current date/time (or `now`) and a
        warning is logged; construction itself never fails.
        """
        if now is None:
            now = datetime.now()
        task = cls(
            id=task_id,
            description=description,
            date=now.date(),
            time=now.time().replace(second=0, microsecond=0),
        )
        task.set_date(date_text)
        task.set_time(time_text)
        return task

    @property
    def timestamp(self) -> datetime:
        return datetime.combine(self.date, self.time)

    def set_description(self, description: str) -> None:
        self.description = description

    def set_date(self, text: str) -> bool:
        parsed = parse_date(text)
        if parsed is None:
            logger.warning("Invalid date format %r. Please use %s.", text, DATE_HINT)
            return False
        self.date = parsed
        return True

    def set_time(self, text: str) -> bool:
        parsed = parse_time(text)
        if parsed is None:
            logger.warning("Invalid time format %r. Please use %s.", text, TIME_HINT)
            return False
        self.time = parsed
        return True

    def __str__(self) -> str:
        return f"{format_date(self.date)} : {format_time(self.time)} : {self.description}"


class InsertStatus(StrEnum):
    INSERTED = "inserted"
    CONFLICT = "conflict"
    REJECTED = "rejected"  # absent task


@dataclass(frozen=True, slots=True)
class InsertResult:
    status: InsertStatus
    task: Task | None = None
    existing: Task | None = None

    @property
    def inserted(self) -> bool:
        return self.status is InsertStatus.INSERTED
