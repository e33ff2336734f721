"""Named, chronologically ordered schedules of dated tasks."""

__version__ = "0.1.0"
