# storage/schedule_file.py

from __future__ import annotations

import contextlib
import csv
import logging
import os
import time
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..schedules.registry import ScheduleRegistry
from ..schedules.schedule_models import Task, format_date, format_time

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = ";"
RECORD_FIELDS = 4
SCHEDULE_SUFFIX = ".txt"
EXPORT_SUFFIX = ".csv"
CSV_HEADER = ("ScheduleName", "Date", "Time", "Task")


class ScheduleFileError(OSError):
    """Read/write failure of a schedule file. Wraps the underlying OSError."""


@dataclass(frozen=True, slots=True)
class ScheduleRecord:
    schedule_name: str
    date_text: str
    time_text: str
    description: str


@dataclass(frozen=True, slots=True)
class LoadSummary:
    tasks: int
    schedules: int
    skipped: int
    conflicts: int = 0


def parse_record_line(line: str) -> ScheduleRecord | None:
    """
    Parse `name;MM/dd/yyyy;hh:mm AM;description`.

    Only the first three separators split, so the description may contain ';'.
    Returns None for blank or malformed lines.
    """
    line = line.strip()
    if not line:
        return None
    parts = line.split(RECORD_SEPARATOR, RECORD_FIELDS - 1)
    if len(parts) < RECORD_FIELDS or not parts[-1]:
        return None
    name, date_text, time_text, description = parts
    return ScheduleRecord(name, date_text, time_text, description)


def format_record_line(schedule_name: str, task: Task) -> str:
    return RECORD_SEPARATOR.join(
        (schedule_name, format_date(task.date), format_time(task.time), task.description)
    )


def export_rows(registry: ScheduleRegistry) -> Iterator[tuple[str, str, str, str]]:
    """CSV rows in registry order, each schedule in its traversal order."""
    for schedule in registry:
        for task in schedule:
            yield (
                schedule.name,
                task.date.isoformat(),
                task.time.strftime("%H:%M"),
                task.description.replace(",", " "),
            )


def list_schedule_files(directory: str | Path) -> list[str]:
    """Names of the `*.txt` files in directory, sorted. Missing dir -> []."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        p.name for p in directory.iterdir() if p.is_file() and p.suffix == SCHEDULE_SUFFIX
    )


def normalize_file_name(raw: str, *, now_ts: float | None = None) -> str:
    name = (raw or "").strip()
    if not name:
        if now_ts is None:
            now_ts = time.time()
        name = f"schedule_{int(now_ts * 1000)}{SCHEDULE_SUFFIX}"
        logger.warning("Empty file name entered; defaulting to %s", name)
        return name
    if not name.endswith(SCHEDULE_SUFFIX):
        name += SCHEDULE_SUFFIX
    return name


def create_schedule_file(directory: str | Path, raw_name: str) -> Path:
    """
    Create an empty schedule file (or reuse an existing one) and return its path.
    """
    directory = Path(directory)
    path = directory / normalize_file_name(raw_name)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        if path.exists():
            logger.info("File already exists, using existing one: %s", path.name)
        else:
            path.touch()
            logger.info("File created: %s", path)
    except OSError as e:
        raise ScheduleFileError(f"Error creating file {path.name}: {e}") from e
    return path


class ScheduleFileStore:
    """
    Flat-file persistence for schedules.

    Format: one `;`-separated record per line (see parse_record_line).
    - load_into() feeds every record into a registry (get_or_create + insert)
    - append() writes one record after a successful interactive insert
    - export_csv() writes the whole registry as a table next to the record file

    The store never keeps the file open between calls.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def csv_path(self) -> Path:
        return self._path.with_suffix(EXPORT_SUFFIX)

    def exists(self) -> bool:
        return self._path.is_file()

    # ---- reading ----

    def _scan(self) -> Iterator[tuple[str, ScheduleRecord | None]]:
        """Yield (line, record) for every non-blank line; record is None if malformed."""
        try:
            with open(self._path, encoding="utf-8") as f:
                for raw in f:
                    line = raw.strip()
                    if not line:
                        continue
                    record = parse_record_line(line)
                    if record is None:
                        logger.warning("Skipping malformed line: %s", line)
                    yield line, record
        except OSError as e:
            raise ScheduleFileError(f"Error reading file {self._path.name}: {e}") from e

    def read_records(self) -> Iterator[ScheduleRecord]:
        for _, record in self._scan():
            if record is not None:
                yield record

    def load_into(
        self,
        registry: ScheduleRegistry,
        *,
        reject_conflicts: bool = False,
    ) -> LoadSummary:
        """
        Load every record into the registry.

        By default the file is taken as-is, duplicates included. With
        reject_conflicts the in-schedule conflict check applies and clashing
        records are dropped.
        """
        if not self.exists():
            logger.error("%s does not exist", self._path.name)
            return LoadSummary(tasks=0, schedules=len(registry), skipped=0)

        loaded = 0
        skipped = 0
        conflicts = 0
        logger.info("File opened: %s", self._path.name)
        for _, record in self._scan():
            if record is None:
                skipped += 1
                continue
            schedule, _ = registry.get_or_create(record.schedule_name)
            task = registry.new_task(record.description, record.date_text, record.time_text)
            result = schedule.insert_sorted(task, allow_conflicts=not reject_conflicts)
            if result.inserted:
                loaded += 1
                continue
            conflicts += 1
            logger.warning(
                "Skipping conflicting record in %r: %s (existing: %s)",
                record.schedule_name,
                task,
                result.existing,
            )

        summary = LoadSummary(
            tasks=loaded,
            schedules=len(registry),
            skipped=skipped,
            conflicts=conflicts,
        )
        logger.info(
            "Loaded %d task(s) across %d schedule(s) from %s (skipped=%d conflicts=%d)",
            summary.tasks,
            summary.schedules,
            self._path.name,
            summary.skipped,
            summary.conflicts,
        )
        return summary

    # ---- writing ----

    def append(self, schedule_name: str, task: Task) -> None:
        line = format_record_line(schedule_name, task)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            raise ScheduleFileError(f"Error writing to file {self._path.name}: {e}") from e
        logger.debug("Record appended to %s: %s", self._path.name, line)

    def export_csv(self, registry: ScheduleRegistry, path: Path | None = None) -> Path:
        """Write header + rows atomically (tmp file then replace). Returns the target path."""
        target = Path(path) if path is not None else self.csv_path
        tmp = target.with_suffix(target.suffix + ".tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerow(CSV_HEADER)
                n = 0
                for row in export_rows(registry):
                    writer.writerow(row)
                    n += 1
            os.replace(tmp, target)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise ScheduleFileError(f"Error exporting to CSV {target.name}: {e}") from e
        logger.info("Exported %d row(s) to %s", n, target)
        return target
