"""
Schedule subsystem.

Components:
- schedule_models.py: data structures (Task, TaskIdCounter, InsertResult) + date/time text helpers
- schedule.py: ordered task list of one schedule (sorted insert, lookup, removal, reversal)
- registry.py: the named schedules of the running program
- schedule_api.py: small high-level helpers used by the CLI
"""
