# src/schedule_manager/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- picks the schedule file (open an existing one or create a new one),
- wires the flat-file store and an empty registry into AppState,
- loads the file into the registry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..schedules.registry import ScheduleRegistry
from ..storage.schedule_file import (
    LoadSummary,
    ScheduleFileStore,
    create_schedule_file,
    list_schedule_files,
)

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
Emit = Callable[[str], None]


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def choose_schedule_file(settings, ask: Prompt, emit: Emit = print) -> Path:
    """
    Ask whether to Open an existing file or create a New one.

    Any path that cannot open an existing file (empty dir, bad number) falls
    back to creating a new file.
    """
    data_dir = Path(settings.data_dir)
    emit("Do you want to open an existing file or create a new one?")
    option = ask("Enter (O) to Open or (N) to Create New: ").strip()

    if option.lower() == "o":
        files = list_schedule_files(data_dir)
        if not files:
            emit("No files found in directory. Creating a new file instead.")
            return _create_new(data_dir, ask, emit)

        emit("\nAvailable schedule files:")
        for i, name in enumerate(files, start=1):
            emit(f" {i}. {name}")
        raw = ask("Enter the number of the file you want to open: ").strip()
        if raw.isdigit() and 0 < int(raw) <= len(files):
            path = data_dir / files[int(raw) - 1]
            emit(f"Opening file: {path.name}")
            return path

        emit("Invalid choice. Creating a new file instead.")

    return _create_new(data_dir, ask, emit)


def _create_new(data_dir: Path, ask: Prompt, emit: Emit) -> Path:
    raw = ask("Enter the name of the new file (without extension): ")
    path = create_schedule_file(data_dir, raw)
    emit(f"Using file: {path.name}")
    return path


def create_initial_state(*, settings=None, path: str | Path | None = None) -> AppState:
    """
    Create AppState for the given schedule file.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if path is None:
        path = settings.schedule_file
    if path is None:
        raise ValueError("a schedule file path is required")

    return AppState(
        settings=settings,
        store=ScheduleFileStore(path),
        registry=ScheduleRegistry(),
    )


def load_schedules(state: AppState) -> LoadSummary:
    reject = bool(getattr(state.settings, "reject_conflicts_on_load", False))
    return state.store.load_into(state.registry, reject_conflicts=reject)
