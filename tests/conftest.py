# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from schedule_manager.core.state import AppState
from schedule_manager.schedules.registry import ScheduleRegistry
from schedule_manager.storage.schedule_file import ScheduleFileStore

FIXED_NOW = datetime(2025, 1, 1, 12, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return SimpleNamespace(
        app_name="schedule-manager-test",
        log_level="DEBUG",
        data_dir=data_dir,
        log_dir=tmp_path / "logs",
        schedule_file=data_dir / "schedules.txt",
        reject_conflicts_on_load=False,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with a real file store under tmp_path.

    NOTE: the flat-file store is real here because its output format is part
    of what we want to test.
    """
    return AppState(
        settings=settings,
        store=ScheduleFileStore(settings.schedule_file),
        registry=ScheduleRegistry(),
    )


@pytest.fixture()
def registry() -> ScheduleRegistry:
    return ScheduleRegistry()


@pytest.fixture()
def make_task(registry: ScheduleRegistry):
    """Build tasks from text with ids from the shared registry counter."""

    def _make(time_text: str, date_text: str = "10/20/2025", description: str = "task"):
        return registry.new_task(description, date_text, time_text, now=FIXED_NOW)

    return _make
